"""
Constants for the Pet Match Alexa skill.

This module contains the request, API and intent names the skill routes on,
the slot names of the interaction model, and the fixed spoken replies.
"""

# Request types
INTENT_REQUEST = "IntentRequest"
API_INVOKED_REQUEST = "Dialog.API.Invoked"
SESSION_ENDED_REQUEST = "SessionEndedRequest"

# Alexa Conversations API definitions
GET_WEATHER_API = "GetWeatherApi"
GET_RECOMMENDATION_API = "getRecommendation"

# Intents
GET_LIGHT_INTENT = "GetLightIntent"

# Slot names used in the interaction model
CITY_SLOT = "cityName"
RECOMMENDATION_SLOTS = ["energy", "size", "temperament"]

# Spoken replies
LIGHT_SPEECH = "Bravo Six Going Dark!"
REFLECTOR_SPEECH = "You just triggered %s"
APOLOGY_SPEECH = "Sorry, I had trouble doing what you asked. Please try again."
