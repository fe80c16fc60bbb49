from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from cloud_labs.logging_config import ensure_logging
from cloud_labs.routes.dynamodb import router as dynamodb_router
from cloud_labs.routes.s3 import router as s3_router
from cloud_labs.services.dynamodb_service import DynamoDBServiceError, DynamoDBTableNotFoundError
from cloud_labs.services.s3_service import S3BucketNotFoundError, S3ServiceError


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_logging()
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(s3_router)
app.include_router(dynamodb_router)


@app.exception_handler(S3ServiceError)
@app.exception_handler(DynamoDBServiceError)
async def aws_service_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map AWS service-layer failures to a consistent HTTP response.

    Missing buckets/tables become 404; anything else becomes 502 Bad Gateway.
    The body is always {"detail": "..."} so clients never see raw AWS errors.
    """
    status_code = status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, (S3BucketNotFoundError, DynamoDBTableNotFoundError)):
        status_code = status.HTTP_404_NOT_FOUND

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc)},
    )


@app.get("/")
async def root():
    return {"message": "Hello World! Cloud labs console is running."}
