from cli import cli
from config.settings import settings
from utils.logger_utils import configure_logging

configure_logging(log_level=settings.app.effective_log_level)

if __name__ == "__main__":
    cli()
