"""Run the registry with uvicorn: python -m starchain"""

import uvicorn


def main() -> None:
    uvicorn.run("starchain.main:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
