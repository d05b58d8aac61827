"""Media sharing and chat API backed by an S3 bucket."""
