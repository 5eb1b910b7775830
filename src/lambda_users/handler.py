from mangum import Mangum

from lambda_users.main import app

# Entry point for AWS Lambda (lambda_users.handler.handler).
# Mangum turns the API Gateway proxy event into an ASGI request for the
# FastAPI app and the app's response back into a proxy response.
handler = Mangum(app, lifespan="off")
