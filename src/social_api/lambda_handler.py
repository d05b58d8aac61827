"""Lambda handler for the Social API using Mangum."""
from mangum import Mangum

from social_api.main import create_app

app = create_app()

# No lifespan: expired verification codes are swept on issue only
handler = Mangum(app, lifespan="off")

lambda_handler = handler
