"""Serve the web app with uvicorn: python -m web [port]. PORT env is honoured."""

import os
import sys

import uvicorn


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    port = int(argv[0]) if argv else int(os.environ.get("PORT", "8000"))
    uvicorn.run("web.app:app", host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
