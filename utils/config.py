# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

import logging
import os

from dotenv import load_dotenv

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


load_dotenv()

_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Config:
    """
    Configuration class for managing environment variables and application settings.
    Provides a centralized location for all configuration values.

    Environment Variables:
        app_id: Alexa skill application ID (default: amzn1.ask.skill.test)
        LOG_LEVEL: Logging level name (default: INFO)
        RECOMMENDATIONS_FILE: JSON file holding the breed recommendation table
        WEATHER_FILE: JSON file holding the static weather readings
        WEATHER_API_URL: Base URL of a weather service (default: use WEATHER_FILE)
        WEATHER_API_KEY: Key sent to the weather service, if any

    Example:
        Access configuration values:
            app_id = Config.APP_ID
            table_file = Config.RECOMMENDATIONS_FILE
    """

    # Application identifiers
    APP_ID: str = os.environ.get("app_id", "amzn1.ask.skill.test")

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Static data
    RECOMMENDATIONS_FILE: str = os.environ.get(
        "RECOMMENDATIONS_FILE", os.path.join(_ROOT, "storage", "data", "pet_match.json")
    )
    WEATHER_FILE: str = os.environ.get(
        "WEATHER_FILE", os.path.join(_ROOT, "weather", "data", "weather.json")
    )

    # Weather service
    WEATHER_API_URL: str = os.environ.get("WEATHER_API_URL", "")
    WEATHER_API_KEY: str = os.environ.get("WEATHER_API_KEY", "")

    # HTTP retry settings
    HTTP_RETRY_TOTAL: int = 3
    HTTP_TIMEOUT: int = 10

    @classmethod
    def validate(cls):
        """
        Validate required configuration values.

        Raises:
            ValueError: If required configuration is missing or invalid
        """
        if not cls.APP_ID or cls.APP_ID == "amzn1.ask.skill.test":
            logger.warning("APP_ID not set or using test value")

        if not os.path.isfile(cls.RECOMMENDATIONS_FILE):
            raise ValueError("RECOMMENDATIONS_FILE does not exist: %s" % cls.RECOMMENDATIONS_FILE)

        if not cls.WEATHER_API_URL and not os.path.isfile(cls.WEATHER_FILE):
            raise ValueError("WEATHER_FILE does not exist: %s" % cls.WEATHER_FILE)

        if logging.getLevelName(cls.LOG_LEVEL) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL
        ):
            raise ValueError("LOG_LEVEL is not a logging level: %s" % cls.LOG_LEVEL)

        logger.info("Configuration validated successfully")
