from __future__ import annotations

import os

import uvicorn


def main() -> None:
    host = os.getenv("MEDMAP_HOST", "0.0.0.0")
    port = int(os.getenv("MEDMAP_PORT", "5000"))
    log_level = os.getenv("MEDMAP_LOG_LEVEL", "info")
    uvicorn.run("medmap.app:create_app", factory=True, host=host, port=port, log_level=log_level, reload=False)


if __name__ == "__main__":
    main()
