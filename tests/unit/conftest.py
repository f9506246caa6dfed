import pytest

from bitbucket_server_client import BitbucketClient, new

BASE_URL = "https://bitbucket.example.com/rest"
API_TOKEN = "API_TOKEN"


@pytest.fixture
def client() -> BitbucketClient:
    return new(BASE_URL, API_TOKEN)
