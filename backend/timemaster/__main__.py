"""Run the API with uvicorn: ``python -m timemaster``."""
import uvicorn

from timemaster.config import settings


def main():
    uvicorn.run("timemaster.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
