"""TenderChain.

Server side of a government tender marketplace whose source of truth lives in
already-deployed smart contracts.

High-level architecture
-----------------------

- ``tenderchain.chain``: read-only clients for the tender registry and bid
  submission contracts, built on ``web3.py``'s async API. Contract tuples are
  turned into typed records and reverts into typed errors.
- ``tenderchain.storage``: an async HTTP client for the document storage
  gateway, including the one-time payment setup the gateway requires before a
  storage context can be created.
- ``tenderchain.server``: the FastAPI application the web UI talks to. It
  lists tenders through a TTL cache that degrades to stale data when the RPC
  node misbehaves, looks up single tenders and bids, and uploads tender and
  proposal documents.
- ``tenderchain.core``: logging, optional Logfire monitoring and small
  formatting helpers.

Writes to the contracts (creating tenders, submitting and accepting bids,
granting roles) are signed by the user's wallet in the browser and never pass
through this server.
"""

__version__ = "0.1.0"
