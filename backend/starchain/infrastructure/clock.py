"""System Clock — wall-clock source injected into the ledger."""

import time

from starchain.core.domain_types import UnixSeconds


class SystemClock:
    """Clock returning integer Unix seconds."""

    def now(self) -> UnixSeconds:
        return UnixSeconds(int(time.time()))
