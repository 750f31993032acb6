# core/moderation.py
import abc
import logging
from dataclasses import dataclass

import requests
from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

MODERATION_PROMPT = """You are an AI content moderator. Analyze the provided image and determine if it's appropriate for a food platform.

Rules:
- ACCEPT: High-quality food photos, restaurant interiors, menu items
- REJECT: Images with text overlays, watermarks, or promotional text
- REJECT: Violent, inappropriate, or non-food content
- REJECT: Blurry, low-quality, or poorly lit images
- REJECT: Images that are clearly not food-related

Respond with only "APPROVED" or "REJECTED" followed by a brief reason if rejected."""


class ModerationUnavailable(Exception):
    """The classifier could not be reached or answered garbage"""


@dataclass
class ModerationResult:
    approved: bool
    reason: str = ''

    @classmethod
    def from_verdict(cls, text):
        verdict = (text or '').strip()
        if 'REJECTED' in verdict.upper():
            reason = verdict[verdict.upper().index('REJECTED') + len('REJECTED'):]
            return cls(approved=False, reason=reason.strip(' :.-'))
        return cls(approved=True)


class BaseImageModerator(abc.ABC):
    """Base class for image classifiers deciding approve/reject"""

    def __init__(self, config=None):
        self.config = config or {}

    @abc.abstractmethod
    def moderate(self, data_url):
        """Return a ModerationResult for an image given as a data URL"""

    def get_moderator_name(self):
        return self.__class__.__name__


class AllowAllModerator(BaseImageModerator):
    """Used when no classifier is configured"""

    def moderate(self, data_url):
        return ModerationResult(approved=True)


class ChatCompletionModerator(BaseImageModerator):
    """Asks an OpenAI-compatible chat completion endpoint for a verdict"""

    def __init__(self, config=None):
        super().__init__(config)
        self.api_url = self.config.get('api_url', '')
        self.api_key = self.config.get('api_key', '')
        self.model = self.config.get('model', '')
        self.timeout = self.config.get('timeout', 15)

    def moderate(self, data_url):
        payload = {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': MODERATION_PROMPT},
                {'role': 'user', 'content': [
                    {'type': 'text', 'text': 'Please moderate this image for a food platform:'},
                    {'type': 'image_url', 'image_url': {'url': data_url}},
                ]},
            ],
            'max_tokens': 50,
            'temperature': 0.1,
        }
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'

        try:
            response = requests.post(
                self.api_url, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            verdict = response.json()['choices'][0]['message']['content']
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as e:
            raise ModerationUnavailable(str(e)) from e

        return ModerationResult.from_verdict(verdict)


def get_moderator():
    config = getattr(settings, 'IMAGE_MODERATION', {})
    backend = config.get('BACKEND', 'core.moderation.AllowAllModerator')
    options = {key.lower(): value for key, value in config.items() if key != 'BACKEND'}
    return import_string(backend)(options)
