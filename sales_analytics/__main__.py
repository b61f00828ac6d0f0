import uvicorn

from sales_analytics.core.config import settings


def main() -> int:
    uvicorn.run("sales_analytics.main:app", host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
