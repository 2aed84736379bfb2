"""CMS entrypoint.

Run with:
  python -m cms
"""

import logging
import os

import uvicorn


def main() -> None:
    logging.basicConfig(
        level=os.getenv("CMS_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    host = os.getenv("CMS_HOST", "0.0.0.0")
    port = int(os.getenv("CMS_PORT", "8000"))
    reload = os.getenv("CMS_RELOAD", "false").lower() in {"1", "true", "yes", "y"}
    uvicorn.run("cms.app:app", host=host, port=port, reload=reload)

if __name__ == "__main__":
    main()
