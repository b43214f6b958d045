import uvicorn
from tally.core.config import settings


def main():
    """Start the FastAPI backend server."""
    uvicorn.run("tally.main:app", host=settings.HOST, port=settings.PORT, reload=True)


if __name__ == "__main__":
    main()
