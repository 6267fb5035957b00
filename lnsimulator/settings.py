import os
from ast import literal_eval


def parse_env(key, default, _type=str):
    if _type == str:
        return os.environ.get(key, default)
    value = literal_eval(os.environ.get(key, default))
    if value is None:
        return None
    return _type(value)

# -------- network generation --------
# number of nodes of a freshly generated network
NUMBER_OF_NODES = parse_env('LNSIMULATOR_NUMBER_OF_NODES', '10', int)
# probability with which a channel between any two nodes is created
CHANNEL_PROBABILITY = parse_env('LNSIMULATOR_CHANNEL_PROBABILITY', '0.3', float)
# seed of the random number generator, None draws fresh entropy each run
SEED = parse_env('LNSIMULATOR_SEED', 'None', int)

# -------- listings --------
# how many rows are printed before the column header is repeated
TABLE_HEADER_REPEAT = parse_env('LNSIMULATOR_TABLE_HEADER_REPEAT', '20', int)


logger_config = None


def set_logger_config(logfile_path=None):
    """
    Builds the logging configuration.

    :param logfile_path: if given, debug output is also written to this file,
        overwrites the LNSIMULATOR_LOGFILE environment variable
    :type logfile_path: str
    """
    global logger_config

    if logfile_path is None:
        logfile_path = os.environ.get('LNSIMULATOR_LOGFILE')

    handlers = {
        'default': {
            'level': 'INFO',
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stdout',  # Default is stderr
        },
    }
    if logfile_path:
        if not os.path.isabs(logfile_path):
            raise ValueError(
                f'Environment variable LNSIMULATOR_LOGFILE must be '
                f'an absolute path. Current: "{logfile_path}"')
        handlers['file'] = {
            'level': 'DEBUG',
            'formatter': 'file',
            'class': 'logging.FileHandler',
            'filename': logfile_path,
            'encoding': 'utf-8',
        }

    logger_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'file': {
                'format': '[%(asctime)s %(levelname)s %(name)s] %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'standard': {
                'format': '%(message)s',
            },
        },
        'handlers': handlers,
        'loggers': {
            '': {  # root logger
                'handlers': list(handlers),
                'level': 'DEBUG',
                'propagate': True
            },
        }
    }


set_logger_config()
