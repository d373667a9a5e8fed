#!/usr/bin/python3

# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

"""
Lambda function handler for the Pet Match Alexa skill.

Routes Alexa Conversations API invocations (weather and breed
recommendation) and plain intents to their ASK SDK handlers.
"""

import json
import logging
import sys
import traceback

from ask_sdk_core.dispatch_components import AbstractRequestHandler, AbstractExceptionHandler
from ask_sdk_core.dispatch_components import AbstractRequestInterceptor, AbstractResponseInterceptor
from ask_sdk_core.response_helper import ResponseFactory
from ask_sdk_core.serialize import DefaultSerializer
from ask_sdk_core.skill_builder import CustomSkillBuilder
from ask_sdk_core.utils import is_request_type, is_intent_name, get_intent_name
from ask_sdk_model import RequestEnvelope

from storage.recommendations import make_key
from utils.config import Config
from utils.constants import (API_INVOKED_REQUEST, APOLOGY_SPEECH, GET_LIGHT_INTENT,
                             GET_RECOMMENDATION_API, GET_WEATHER_API, INTENT_REQUEST,
                             LIGHT_SPEECH, REFLECTOR_SPEECH, SESSION_ENDED_REQUEST)
from utils.entity_resolver import get_city_name_with_id, resolve_entity
from utils.factories import get_recommendations, get_weather_client
from utils.notify import notify

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(Config.LOG_LEVEL)

SERIALIZER = DefaultSerializer()


def to_json(obj):
    """Serialize an ASK SDK model for logging, falling back to repr()."""
    try:
        return json.dumps(SERIALIZER.serialize(obj), default=str)
    except (TypeError, ValueError):
        return repr(obj)


def is_api_request(handler_input, api_name):
    """Return True for a Dialog.API.Invoked request of the given API."""
    if not is_request_type(API_INVOKED_REQUEST)(handler_input):
        return False
    api_request = handler_input.request_envelope.request.api_request
    return api_request is not None and api_request.name == api_name


def build_api_response(handler_input, entity):
    return handler_input.response_builder.set_api_response(entity).response


# ============================================================================
# ASK SDK Request Handlers
# ============================================================================

class GetWeatherApiHandler(AbstractRequestHandler):
    """Handler for the GetWeatherApi API definition"""

    def __init__(self, weather_client):
        self.weather_client = weather_client

    def can_handle(self, handler_input):
        return is_api_request(handler_input, GET_WEATHER_API)

    def handle(self, handler_input):
        api_request = handler_input.request_envelope.request.api_request
        city = get_city_name_with_id(api_request.slots)

        # Let the response template handle an unmatched city
        if city is None:
            logger.info("City did not resolve")
            return build_api_response(handler_input, {})

        weather = self.weather_client.get_weather(city.id)

        return build_api_response(handler_input, {
            "cityName": city.name,
            "lowTemperature": weather.low_temperature,
            "highTemperature": weather.high_temperature
        })


class GetRecommendationApiHandler(AbstractRequestHandler):
    """Handler for the getRecommendation API definition"""

    def __init__(self, recommendations):
        self.recommendations = recommendations

    def can_handle(self, handler_input):
        return is_api_request(handler_input, GET_RECOMMENDATION_API)

    def handle(self, handler_input):
        api_request = handler_input.request_envelope.request.api_request

        energy = resolve_entity(api_request.slots, "energy")
        size = resolve_entity(api_request.slots, "size")
        temperament = resolve_entity(api_request.slots, "temperament")

        entity = {}
        if energy is not None and size is not None and temperament is not None:
            record = self.recommendations.lookup(energy, size, temperament)
            if record is None:
                logger.warning("No recommendation for %s", make_key(energy, size, temperament))
            else:
                # Echo what the user asked for, not the canonical values
                arguments = api_request.arguments or {}
                entity = {
                    "name": record["breed"],
                    "size": arguments.get("size"),
                    "energy": arguments.get("energy"),
                    "temperament": arguments.get("temperament")
                }

        response = build_api_response(handler_input, entity)
        logger.info("GetRecommendationApiHandler %s", to_json(response))

        return response


class GetLightIntentHandler(AbstractRequestHandler):
    """Handler for GetLightIntent"""

    def can_handle(self, handler_input):
        return is_intent_name(GET_LIGHT_INTENT)(handler_input)

    def handle(self, handler_input):
        return handler_input.response_builder.speak(LIGHT_SPEECH).response


class SessionEndedRequestHandler(AbstractRequestHandler):
    """Handler for Session End"""

    def can_handle(self, handler_input):
        return is_request_type(SESSION_ENDED_REQUEST)(handler_input)

    def handle(self, handler_input):
        request = handler_input.request_envelope.request

        logger.info("Session ended: %s", getattr(request, "reason", None))
        error = getattr(request, "error", None)
        if error is not None:
            logger.warning("Session ended with error: %s", error.message)

        return handler_input.response_builder.response


class IntentReflectorHandler(AbstractRequestHandler):
    """
    Repeats the name of any intent, for interaction model testing.
    Must be registered after every other intent handler.
    """

    def can_handle(self, handler_input):
        return is_request_type(INTENT_REQUEST)(handler_input)

    def handle(self, handler_input):
        intent_name = get_intent_name(handler_input)
        return handler_input.response_builder.speak(REFLECTOR_SPEECH % intent_name).response


# ============================================================================
# Request and Response Interceptors
# ============================================================================

class RequestLogger(AbstractRequestInterceptor):
    """Log the request envelope."""

    def __init__(self, log):
        self.logger = log

    def process(self, handler_input):
        self.logger.info("REQUEST ENVELOPE = %s", to_json(handler_input.request_envelope))


class ResponseLogger(AbstractResponseInterceptor):
    """Log the response."""

    def __init__(self, log):
        self.logger = log

    def process(self, handler_input, response):
        self.logger.info("RESPONSE = %s", to_json(response))


# ============================================================================
# Exception Handler
# ============================================================================

class AllExceptionHandler(AbstractExceptionHandler):
    """Catch all exception handler."""

    def __init__(self, log):
        self.logger = log

    def can_handle(self, handler_input, exception):
        return True

    def handle(self, handler_input, exception):
        self.logger.error("Error handled: %s", exception)

        stack = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
        notify(SERIALIZER.serialize(handler_input.request_envelope), "Exception", stack, log=self.logger)

        # Start from an empty response so nothing a failed handler set leaks through
        return ResponseFactory().speak(APOLOGY_SPEECH).ask(APOLOGY_SPEECH).response


# ============================================================================
# Skill Builder
# ============================================================================

def build_skill(recommendations, weather_client, log=logger):
    """
    Create the skill with its handlers registered in priority order.

    Args:
        recommendations: RecommendationTable used by getRecommendation
        weather_client: WeatherClient used by GetWeatherApi
        log: Logger given to the interceptors and the exception handler

    Returns:
        CustomSkill ready to be invoked
    """
    sb = CustomSkillBuilder()

    # Order matters - IntentReflectorHandler must stay last
    sb.add_request_handler(GetWeatherApiHandler(weather_client))
    sb.add_request_handler(GetRecommendationApiHandler(recommendations))
    sb.add_request_handler(GetLightIntentHandler())
    sb.add_request_handler(SessionEndedRequestHandler())
    sb.add_request_handler(IntentReflectorHandler())

    sb.add_exception_handler(AllExceptionHandler(log))

    sb.add_global_request_interceptor(RequestLogger(log))
    sb.add_global_response_interceptor(ResponseLogger(log))

    return sb.create()


Config.validate()
skill_instance = build_skill(get_recommendations(), get_weather_client())


# ============================================================================
# Lambda Handler
# ============================================================================

def lambda_handler(event, context=None):
    """
    Lambda handler for Alexa skill using ASK SDK.
    """
    try:
        request_envelope = SERIALIZER.deserialize(json.dumps(event), RequestEnvelope)

        response_envelope = skill_instance.invoke(request_envelope, context)

        return SERIALIZER.serialize(response_envelope)

    except Exception:
        logger.error("Lambda handler exception: %s", traceback.format_exc())
        return {
                 "version": "1.0",
                 "response":
                 {
                   "outputSpeech":
                   {
                     "type": "SSML",
                     "ssml": "<speak>%s</speak>" % APOLOGY_SPEECH
                   },
                   "reprompt":
                   {
                     "outputSpeech":
                     {
                       "type": "SSML",
                       "ssml": "<speak>%s</speak>" % APOLOGY_SPEECH
                     }
                   },
                   "shouldEndSession": False
                 }
               }


def test_one():
    with open(sys.argv[1] if len(sys.argv) > 1 else "event.json") as f:
        event = json.load(f)

    print(json.dumps(lambda_handler(event), indent=4))


if __name__ == "__main__":
    logging.basicConfig()

    test_one()
