"""
Services layer - the Contextual Safety Signal Engine.

DESIGN PRINCIPLE:
- Services contain decision policy and consistency logic, NOT routes
- Classification and policy lookup are pure and never suspend
- Store-facing services fetch full truth and replace their local copy
- Identity is always passed in explicitly
"""
