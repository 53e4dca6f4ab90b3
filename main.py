"""Application entrypoint."""

import uvicorn


def main() -> None:
    """Serve the application with uvicorn.

    Returns
    -------
    None
        Blocks until the server stops.
    """
    uvicorn.run("app.main:app", host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
