PROJECT_NAME = "TenderChain"
API_V1_STR = "/api/v1"
