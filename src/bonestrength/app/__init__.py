"""
Application Layer

This package implements the web application, handling HTTP requests and responses using
the aiohttp framework.

Key Components:
- cli.py: Entry point for running the application
- server.py: Web server configuration and middleware setup
- config.py: Configuration management using Pydantic settings
- session.py: Access token slot in the encrypted cookie session
- handlers/: Request handlers for the home page, OAuth callback and health probes
- tasks.py: Background health gauge task
- metrics.py: Metrics client abstraction

The application uses several middleware layers:
- Statsd middleware for request metrics
- Sentry middleware for error reporting
- Session middleware for the encrypted session cookie

It provides the following endpoints:
- GET / (consent page or bone strength results)
- GET /receive_code/ (OAuth callback)
- GET /static/* (static assets)
- GET /internal/alive and /internal/ready (health probes)
"""
