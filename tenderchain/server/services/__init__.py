"""Service layer between the API routes and the chain / storage clients."""
