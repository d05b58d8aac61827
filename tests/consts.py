TEST_BUCKET_NAME = "test-social-media-storage"
TEST_REGION = "us-east-1"
TEST_PUBLIC_BASE_URL = "https://cdn.example.com"
