"""Run the API server: python -m orderdesk"""

import uvicorn

from orderdesk.settings import settings


def main() -> None:
    uvicorn.run("orderdesk.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
