"""Backend entrypoint: starts uvicorn with host/port from env."""
import os
import uvicorn

# Import app directly so frozen bundles can resolve the package (uvicorn's
# string-based import fails there).
from wealthtrack.main import app


def main() -> None:
    host = os.environ.get("WEALTHTRACK_HOST", "127.0.0.1")
    port = int(os.environ.get("WEALTHTRACK_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
