import logging, sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"

def setup_logging(level: str = "INFO", sql_echo: bool = False):
    """Root stdout handler, installed once per process."""
    root = logging.getLogger()
    if root.handlers:  # don’t double add during reload or per-test app factories
        return
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    # statement logging only when explicitly requested
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if sql_echo else logging.WARNING)
