# cli.py
import logging

import click

from social_api.database import BlobDocumentStore
from social_api.s3.client import get_s3_client
from social_api.settings import get_settings

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for running and inspecting the Social API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  App Name: {settings.app_name}")
    print(f"  AWS Region: {settings.aws_region}")
    print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    print(f"  S3 Bucket: {settings.s3_bucket_name}")
    print(f"  Public Base URL: {settings.public_base_url}")
    print(f"  Verification Code TTL: {settings.verification_code_ttl_seconds}s")
    print(f"  Expose Verification Code: {settings.expose_verification_code}")
    print(f"  Log Level: {settings.log_level}")


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", default=8000, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """Run the API with uvicorn"""
    import uvicorn

    uvicorn.run(
        "social_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@cli.command()
@click.option("--limit", default=20, type=int, help="Maximum number of users to show")
def list_users(limit):
    """List stored users, newest first"""
    settings = get_settings()
    store = BlobDocumentStore(settings.s3_bucket_name, s3_client=get_s3_client(settings))

    users = sorted(store.get_users(), key=lambda user: user.created_at, reverse=True)
    if not users:
        print("No users found")
        return

    for user in users[:limit]:
        print(f"{user.id}  {user.email}  {user.name}  {user.created_at.isoformat()}")


if __name__ == "__main__":
    cli()
