"""Run the API server: python -m portal"""
import uvicorn

from portal import config


def main():
    uvicorn.run(
        "portal.api_server:app",
        host=config.API_HOST,
        port=config.API_PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
