import logging
import os

from .main import create_app

logger = logging.getLogger(__name__)

# WSGI entry point: gunicorn gym_backoffice.app:app
app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", 5000))
    logger.info("Starting development server", extra={"context": {"port": port}})
    app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_ENV") == "development")
