"""Server entry point: `python -m invoice_desk` or the `invoice-desk` script.

Runs a single uvicorn worker; the list-view cache is process-local.
"""

import uvicorn

from invoice_desk.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "invoice_desk.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        workers=1,
    )


if __name__ == "__main__":
    main()
