from .logging_config import configure_logging
from .pipeline import run_sample

configure_logging()
run_sample()
