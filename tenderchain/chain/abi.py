"""ABI fragments for the deployed contracts.

Only the read functions and custom errors the server uses are listed; the full
contract ABIs also cover the wallet-signed writes issued from the browser.
"""

TENDER_REGISTRY_ABI = [
    {
        "type": "function",
        "name": "getTenderCount",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "getTenderDetails",
        "stateMutability": "view",
        "inputs": [{"name": "tenderId", "type": "uint256"}],
        "outputs": [
            {"name": "description", "type": "string"},
            {"name": "budget", "type": "uint256"},
            {"name": "requirementsCid", "type": "string"},
            {"name": "government", "type": "address"},
            {"name": "isActive", "type": "bool"},
        ],
    },
    {
        "type": "function",
        "name": "getTenderInfo",
        "stateMutability": "view",
        "inputs": [{"name": "tenderId", "type": "uint256"}],
        "outputs": [
            {"name": "description", "type": "string"},
            {"name": "budget", "type": "uint256"},
            {"name": "requirementsCid", "type": "string"},
            {"name": "completed", "type": "bool"},
            {"name": "bidIds", "type": "uint256[]"},
            {"name": "creator", "type": "address"},
            {"name": "createdAt", "type": "uint256"},
        ],
    },
    {
        "type": "function",
        "name": "hasRole",
        "stateMutability": "view",
        "inputs": [
            {"name": "role", "type": "bytes32"},
            {"name": "account", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "serviceFee",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {"type": "error", "name": "InvalidTenderId", "inputs": []},
]

BID_SUBMISSION_ABI = [
    {
        "type": "function",
        "name": "getBidInfo",
        "stateMutability": "view",
        "inputs": [{"name": "bidId", "type": "uint256"}],
        "outputs": [
            {"name": "tenderId", "type": "uint256"},
            {"name": "vendor", "type": "address"},
            {"name": "price", "type": "uint256"},
            {"name": "description", "type": "string"},
            {"name": "proposalCid", "type": "string"},
            {"name": "status", "type": "uint8"},
            {"name": "submittedAt", "type": "uint256"},
        ],
    },
    {
        "type": "function",
        "name": "serviceFee",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {"type": "error", "name": "InvalidBidId", "inputs": []},
]
