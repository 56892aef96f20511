"""
Copyright 2026 ray-cast-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "ray_cast_shapely"


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure the package logger.

    Installs a stdout handler and, if log_file is given, a file handler.
    Previously installed handlers are removed, so calling this again
    reconfigures instead of duplicating output.

    Args:
        level: Logging level (default: logging.INFO)
        log_file: Optional path of a log file, overwritten on each call

    Returns:
        logging.Logger: The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
    return logger
