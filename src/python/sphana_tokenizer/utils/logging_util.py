import logging

LOG_FORMAT = '%(asctime)s %(levelname)s: [%(name)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%dT%H:%M:%SZ'

class LoggingUtil:

    @staticmethod
    def configure(level: int | str = logging.INFO) -> None:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            handlers=[logging.StreamHandler()]
        )
