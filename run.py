import logging
import os

from make10 import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

app = create_app()

if __name__ == "__main__":
    app.run(host=os.environ.get("MAKE10_HOST", "127.0.0.1"),
            port=int(os.environ.get("MAKE10_PORT", "5000")),
            debug=app.config.get("DEBUG", False))
