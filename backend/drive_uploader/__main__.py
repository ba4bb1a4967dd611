"""
Run the API server: python -m drive_uploader
"""
import uvicorn

from drive_uploader.config import settings


def main():
    uvicorn.run("drive_uploader.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
