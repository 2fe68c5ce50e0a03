import logging
import sys

from dingtalk_proxy.constants import APP_PORT, DEBUG_MODE, LOG_LEVEL
from dingtalk_proxy.controller import create_app

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = create_app()

if __name__ == '__main__':
    logging.getLogger(__name__).info("Dingtalk server start")
    app.run(host='0.0.0.0', port=APP_PORT, debug=DEBUG_MODE, use_reloader=False)
