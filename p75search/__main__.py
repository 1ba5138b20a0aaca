import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "p75search.main:app",
        host=os.environ.get("P75_SEARCH_HOST", "127.0.0.1"),
        port=int(os.environ.get("P75_SEARCH_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
