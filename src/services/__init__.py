"""Business logic services used by handlers.

Services are imported lazily by handlers so a cold start does not build a
DynamoDB resource until a route actually needs one.
"""

# Do NOT import services here - use lazy loading in handlers instead
