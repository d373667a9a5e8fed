#!/usr/bin/env python3
"""
Test the ASK SDK skill end to end without AWS resources
"""
import copy
import logging
import os
from unittest import mock

# Set required environment variables before importing
os.environ["app_id"] = "amzn1.ask.skill.test"

from ask_sdk_model.slu.entityresolution import StatusCode

from envelopes import (APP_ID, USER_ID, api_request, api_slot, intent_request, launch_request,
                       session_ended_request)
from lambda_function import build_skill, lambda_handler
from storage.recommendations import RecommendationTable
from weather.client import StaticWeatherClient

APOLOGY = "<speak>Sorry, I had trouble doing what you asked. Please try again.</speak>"


def make_skill(weather_client=None):
    table = RecommendationTable({"high-small-friendly": {"breed": "Chihuahua"}})
    weather_client = weather_client or StaticWeatherClient(
        {"X": {"lowTemperature": 10, "highTemperature": 20}})
    return build_skill(table, weather_client, logging.getLogger("test_ask_sdk_integration"))


def invoke(skill, request_envelope):
    return skill.invoke(request_envelope=request_envelope, context=None).response


def test_routing():
    """Each request type reaches its handler"""
    skill = make_skill()

    weather = invoke(skill, api_request(
        "GetWeatherApi", slots={"cityName": api_slot("seattle", values=[("Seattle", "X")])}))
    assert weather.api_response == {"cityName": "Seattle", "lowTemperature": 10, "highTemperature": 20}

    light = invoke(skill, intent_request("GetLightIntent"))
    assert light.output_speech.ssml == "<speak>Bravo Six Going Dark!</speak>"

    reflected = invoke(skill, intent_request("HelloWorldIntent"))
    assert reflected.output_speech.ssml == "<speak>You just triggered HelloWorldIntent</speak>"

    ended = invoke(skill, session_ended_request())
    assert ended.output_speech is None
    assert ended.api_response is None
    print("✓ Requests routed to their handlers")


def test_recommendation_not_reflected():
    """getRecommendation is answered by its API handler, never the reflector"""
    skill = make_skill()
    slots = {
        "energy": api_slot("hyper", values=[("high", "high")]),
        "size": api_slot("tiny", values=[("small", "small")]),
        "temperament": api_slot("sweet", values=[("friendly", "friendly")])
    }
    arguments = {"energy": "hyper", "size": "tiny", "temperament": "sweet"}

    response = invoke(skill, api_request("getRecommendation", slots=slots, arguments=arguments))

    assert response.output_speech is None
    assert response.api_response == {
        "name": "Chihuahua",
        "size": "tiny",
        "energy": "hyper",
        "temperament": "sweet"
    }

    slots["size"] = api_slot("enormous", code=StatusCode.ER_SUCCESS_NO_MATCH)
    response = invoke(skill, api_request("getRecommendation", slots=slots, arguments=arguments))
    assert response.api_response == {}
    print("✓ getRecommendation handled by its API handler")


def test_handler_failure_apologizes():
    weather_client = mock.Mock()
    weather_client.get_weather.side_effect = RuntimeError("weather service down")
    skill = make_skill(weather_client)

    response = invoke(skill, api_request(
        "GetWeatherApi", slots={"cityName": api_slot("seattle", values=[("Seattle", "X")])}))

    assert response.output_speech.ssml == APOLOGY
    assert response.reprompt.output_speech.ssml == APOLOGY
    assert response.api_response is None
    assert response.card is None
    print("✓ Handler failure turned into apology")


def test_malformed_slot_apologizes():
    """A missing recommendation slot is a precondition failure"""
    skill = make_skill()

    response = invoke(skill, api_request("getRecommendation",
                                         slots={"energy": api_slot("hyper", values=[("high", "high")])}))

    assert response.output_speech.ssml == APOLOGY


def test_unrouted_request_apologizes():
    skill = make_skill()

    response = invoke(skill, launch_request())

    assert response.output_speech.ssml == APOLOGY
    print("✓ Unrouted request turned into apology")


EVENT = {
    "version": "1.0",
    "session": {
        "new": False,
        "sessionId": "amzn1.echo-api.session.test",
        "application": {"applicationId": APP_ID},
        "attributes": {},
        "user": {"userId": USER_ID}
    },
    "context": {
        "System": {
            "application": {"applicationId": APP_ID},
            "user": {"userId": USER_ID}
        }
    }
}


def resolved(value, name):
    return {
        "type": "Simple",
        "value": value,
        "resolutions": {
            "resolutionsPerAuthority": [
                {
                    "authority": "amzn1.er-authority.echo-sdk.%s.Slot" % APP_ID,
                    "status": {"code": "ER_SUCCESS_MATCH"},
                    "values": [{"value": {"name": name, "id": name}}]
                }
            ]
        }
    }


def test_lambda_handler_intent():
    event = copy.deepcopy(EVENT)
    event["request"] = {
        "type": "IntentRequest",
        "requestId": "amzn1.echo-api.request.test",
        "timestamp": "2024-01-01T00:00:00Z",
        "locale": "en-US",
        "intent": {"name": "GetLightIntent", "confirmationStatus": "NONE"}
    }

    response = lambda_handler(event, None)

    assert response["version"] == "1.0"
    assert response["response"]["outputSpeech"]["ssml"] == "<speak>Bravo Six Going Dark!</speak>"
    print("✓ lambda_handler answers intents")


def test_lambda_handler_recommendation():
    """The bundled table answers a serialized getRecommendation event"""
    event = copy.deepcopy(EVENT)
    event["request"] = {
        "type": "Dialog.API.Invoked",
        "requestId": "amzn1.echo-api.request.test",
        "timestamp": "2024-01-01T00:00:00Z",
        "locale": "en-US",
        "apiRequest": {
            "name": "getRecommendation",
            "arguments": {"energy": "hyper", "size": "tiny", "temperament": "sweet"},
            "slots": {
                "energy": resolved("hyper", "high"),
                "size": resolved("tiny", "small"),
                "temperament": resolved("sweet", "friendly")
            }
        }
    }

    response = lambda_handler(event, None)

    assert response["response"]["apiResponse"] == {
        "name": "Chihuahua",
        "size": "tiny",
        "energy": "hyper",
        "temperament": "sweet"
    }
    print("✓ lambda_handler answers API invocations")


def test_lambda_handler_unrouted():
    event = copy.deepcopy(EVENT)
    event["request"] = {
        "type": "LaunchRequest",
        "requestId": "amzn1.echo-api.request.test",
        "timestamp": "2024-01-01T00:00:00Z",
        "locale": "en-US"
    }

    response = lambda_handler(event, None)

    assert response["response"]["outputSpeech"]["ssml"] == APOLOGY
    assert response["response"]["reprompt"]["outputSpeech"]["ssml"] == APOLOGY


if __name__ == "__main__":
    test_routing()
    test_recommendation_not_reflected()
    test_handler_failure_apologizes()
    test_unrouted_request_apologizes()
    test_lambda_handler_intent()
    test_lambda_handler_recommendation()
