from __future__ import annotations
import re

from ..core.models import AWS_ACCESS_KEY_ID, GENERIC_KV_SECRET, GITHUB_PAT
from .base import RegexDetector


GENERIC_KEYS = [
    r"password",
    r"passwd",
    r"pwd",
    r"secret",
    r"token",
    r"apikey",
    r"api_key",
]

GENERIC_KV_REGEX = re.compile(
    rf"(?i)({'|'.join(GENERIC_KEYS)})\s*[:=]\s*['\"]?([^'\"\s]+)['\"]?"
)


class AwsAccessKeyDetector(RegexDetector):
    NAME = "aws"
    KIND = AWS_ACCESS_KEY_ID
    ORDER = 10
    REGEX = re.compile(r"AKIA[0-9A-Z]{16}")


class GithubPatDetector(RegexDetector):
    NAME = "github"
    KIND = GITHUB_PAT
    ORDER = 20
    REGEX = re.compile(r"ghp_[A-Za-z0-9]{36}")


class GenericSecretDetector(RegexDetector):
    NAME = "generic"
    KIND = GENERIC_KV_SECRET
    ORDER = 30
    REGEX = GENERIC_KV_REGEX
