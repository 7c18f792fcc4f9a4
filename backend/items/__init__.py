"""
Domain item model.

Responsibilities:
- Define the closed set of item variants (Restaurant, Park, Event).
- Serialise them with the camelCase field names the frontend consumes.
"""
