"""Users API Lambda: CRUD over a DynamoDB table behind API Gateway."""
