import logging
import logging.config
from typing import Optional

LEVELS = {0: 'WARNING', 1: 'INFO'}


def setup_logging(verbosity: int = 0, log_file: Optional[str] = 'debug.txt') -> None:
    """
    Set up logging for the interpreter.

    Args:
        verbosity: number of -v flags given; 0 logs warnings only, 1 adds
            info, 2 or more adds debug records.
        log_file: file that receives the records when verbosity > 0. Warnings
            always go to stderr.
    """
    level = LEVELS.get(verbosity, 'DEBUG')

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'detailed': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'simple': {
                'format': '%(levelname)s - %(name)s - %(message)s'
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': 'WARNING',
                'formatter': 'simple',
                'stream': 'ext://sys.stderr'
            },
        },
        'loggers': {
            'simple': {
                'level': level,
                'handlers': ['console'],
                'propagate': False
            },
        },
    }

    if verbosity > 0 and log_file:
        config['handlers']['file'] = {
            'class': 'logging.FileHandler',
            'level': level,
            'formatter': 'detailed',
            'filename': log_file,
            'mode': 'w',
            'encoding': 'utf-8'
        }
        config['loggers']['simple']['handlers'].append('file')

    logging.config.dictConfig(config)
