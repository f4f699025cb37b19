#!/usr/bin/env python3
"""
Tests for the Gemini REST client.

Run with:
    python -m pytest tests/test_genai_client.py
"""
import json
import os
import sys
import unittest
from unittest.mock import MagicMock, patch

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from genai_client import (
    DEFAULT_SAFETY_SETTINGS, GeminiClient, GenAIAPIError, GenAIAuthError, GenAIResponseError,
)


def _reply(payload, status=200):
    """Build a fake requests.Response for a generateContent answer."""
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    resp.text = json.dumps(payload)
    return resp


def _answer(text):
    return _reply({'candidates': [{'content': {'parts': [{'text': text}]},
                                   'finishReason': 'STOP'}]})


class TestGeminiClientInit(unittest.TestCase):

    def test_empty_key_rejected(self):
        with self.assertRaises(ValueError):
            GeminiClient(api_key='')

    def test_models_prefix_stripped(self):
        self.assertEqual(GeminiClient('k', model='models/gemini-pro').model, 'gemini-pro')
        self.assertEqual(GeminiClient('k').model, 'gemini-2.0-flash')


class TestGenerateJson(unittest.TestCase):

    def setUp(self):
        self.client = GeminiClient(api_key='test-key', model='gemini-test', timeout=7)

    @patch('genai_client.requests.post')
    def test_request_shape(self, mock_post):
        mock_post.return_value = _answer('{"goal_ml": 2400}')
        schema = {'type': 'OBJECT', 'properties': {'goal_ml': {'type': 'NUMBER'}}}
        self.client.generate_json('hello', response_schema=schema, temperature=0.2)

        url = mock_post.call_args[0][0]
        kwargs = mock_post.call_args[1]
        self.assertTrue(url.endswith('/models/gemini-test:generateContent'))
        self.assertEqual(kwargs['headers']['x-goog-api-key'], 'test-key')
        self.assertEqual(kwargs['timeout'], 7)
        body = kwargs['json']
        self.assertEqual(body['contents'][0]['parts'][0]['text'], 'hello')
        self.assertEqual(body['generationConfig']['responseMimeType'], 'application/json')
        self.assertEqual(body['generationConfig']['responseSchema'], schema)
        self.assertEqual(body['generationConfig']['temperature'], 0.2)
        self.assertEqual(body['safetySettings'], DEFAULT_SAFETY_SETTINGS)

    @patch('genai_client.requests.post')
    def test_returns_parsed_object(self, mock_post):
        mock_post.return_value = _answer('{"title": "Hi", "message": "Drink up"}')
        self.assertEqual(self.client.generate_json('p'),
                         {'title': 'Hi', 'message': 'Drink up'})

    @patch('genai_client.requests.post')
    def test_multi_part_text_joined(self, mock_post):
        mock_post.return_value = _reply({'candidates': [{'content': {'parts': [
            {'text': '{"insight": '}, {'text': '"sip more"}'}]}}]})
        self.assertEqual(self.client.generate_json('p'), {'insight': 'sip more'})

    @patch('genai_client.requests.post')
    def test_auth_error(self, mock_post):
        resp = _reply({'error': {'message': 'bad key'}}, status=403)
        resp.raise_for_status.side_effect = requests.HTTPError('403')
        mock_post.return_value = resp
        with self.assertRaises(GenAIAuthError):
            self.client.generate_json('p')

    @patch('genai_client.requests.post')
    def test_http_error(self, mock_post):
        resp = _reply({'error': {'message': 'overloaded'}}, status=503)
        resp.raise_for_status.side_effect = requests.HTTPError('503')
        mock_post.return_value = resp
        with self.assertRaises(GenAIAPIError):
            self.client.generate_json('p')

    @patch('genai_client.requests.post')
    def test_network_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError('unreachable')
        with self.assertRaises(GenAIAPIError):
            self.client.generate_json('p')

    @patch('genai_client.requests.post')
    def test_invalid_json_body(self, mock_post):
        resp = _reply({})
        resp.json.side_effect = ValueError('no json')
        mock_post.return_value = resp
        with self.assertRaises(GenAIAPIError):
            self.client.generate_json('p')

    @patch('genai_client.requests.post')
    def test_blocked_prompt(self, mock_post):
        mock_post.return_value = _reply({'promptFeedback': {'blockReason': 'SAFETY'}})
        with self.assertRaisesRegex(GenAIResponseError, 'SAFETY'):
            self.client.generate_json('p')

    @patch('genai_client.requests.post')
    def test_no_candidates(self, mock_post):
        mock_post.return_value = _reply({'candidates': []})
        with self.assertRaises(GenAIResponseError):
            self.client.generate_json('p')

    @patch('genai_client.requests.post')
    def test_empty_answer(self, mock_post):
        mock_post.return_value = _reply({'candidates': [{'content': {'parts': []},
                                                         'finishReason': 'MAX_TOKENS'}]})
        with self.assertRaisesRegex(GenAIResponseError, 'MAX_TOKENS'):
            self.client.generate_json('p')

    @patch('genai_client.requests.post')
    def test_non_json_answer(self, mock_post):
        mock_post.return_value = _answer('Drink water!')
        with self.assertRaises(GenAIResponseError):
            self.client.generate_json('p')

    @patch('genai_client.requests.post')
    def test_non_object_answer(self, mock_post):
        mock_post.return_value = _answer('[1, 2]')
        with self.assertRaises(GenAIResponseError):
            self.client.generate_json('p')


if __name__ == '__main__':
    unittest.main()
