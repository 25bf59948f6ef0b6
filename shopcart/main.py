# shopcart/main.py
import uvicorn

from shopcart.api import create_app
from shopcart.utils.settings import HOST, PORT, LOG_LEVEL

app = create_app()


def run():
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
