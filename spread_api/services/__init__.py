"""Business logic services.

Services contain discovery, menu retrieval and ranking and are called by routes.
Dependencies (cache store, HTTP client, settings) arrive via ServiceContext.
"""
