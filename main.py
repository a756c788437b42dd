import logging

from app.constants import APP_PORT, DEBUG_MODE, LOG_LEVEL
from app.controller import create_app

logging.basicConfig(
    level=logging.DEBUG if DEBUG_MODE else LOG_LEVEL,
    format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
)

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=APP_PORT, debug=DEBUG_MODE)
