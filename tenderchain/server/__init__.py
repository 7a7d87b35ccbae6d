"""
TenderChain Server Package.

This package contains the web server the tender marketplace UI talks to.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Settings and constants.
    services: Tender catalog cache, document uploads and dependency wiring.
    middleware: Request logging.
    exception_handlers: Error-to-response mapping.
"""
