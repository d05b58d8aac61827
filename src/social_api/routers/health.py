from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends

from social_api.database import BlobDocumentStore
from social_api.dependencies import get_store, get_verification_store
from social_api.verification import VerificationCodeStore

router = APIRouter()


@router.get("/health")
def health_check(
    store: BlobDocumentStore = Depends(get_store),
    verification: VerificationCodeStore = Depends(get_verification_store),
):
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns the status of the API, the object store bucket and the
    verification code cache.
    """
    health_status = {
        "status": "ok",
        "bucket": store.bucket_name,
        "components": {
            "api": "ready",
            "storage": "initializing",
            "verification": "ready",
        },
        "ready": False,
    }

    try:
        s3_client = store.s3_client
        s3_client.head_bucket(Bucket=store.bucket_name)
        health_status["components"]["storage"] = "ready"
    except (ClientError, BotoCoreError) as e:
        health_status["components"]["storage"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    health_status["pending_verifications"] = len(verification.cache.items())

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )
    return health_status
