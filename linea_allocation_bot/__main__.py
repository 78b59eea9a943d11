import os

import uvicorn

from .bot import web_app


def main():
    uvicorn.run(web_app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", 8000)))


if __name__ == "__main__":
    main()
