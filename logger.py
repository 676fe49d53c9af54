import logging
import os


def setup_logging(log_file="lightning.log", level=logging.DEBUG):
    """
    Configures the root logger to write to a file.

    The tcod window owns the screen, so nothing is logged to the terminal.

    Args:
        log_file (str): The path to the log file.
        level (int): Minimum level written to the file.
    """
    log_dir = os.path.dirname(log_file)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    logging.basicConfig(
        filename=log_file,
        filemode='w',  # Overwrite log on each run
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized successfully.")
