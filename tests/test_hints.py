import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from brickword.core.exceptions import HintError
from brickword.io.gemini_client import GeminiAPIError, GeminiClient
from brickword.io.hints import GeminiHintProvider, TemplateHintProvider, resolve_hint


class TemplateHintTests(unittest.TestCase):
    def test_lists_word_lengths(self) -> None:
        self.assertEqual(TemplateHintProvider().generate(["matej", "anet"]), "2 words: 5, 4 letters")

    def test_singular_noun(self) -> None:
        self.assertEqual(TemplateHintProvider().generate(["cat"]), "1 word: 3 letters")

    def test_empty_list_raises(self) -> None:
        with self.assertRaises(HintError):
            TemplateHintProvider().generate(["  "])


class GeminiHintTests(unittest.TestCase):
    def test_hint_is_cleaned(self) -> None:
        client = MagicMock()
        client.generate_text.return_value = '```\n"Two   names from Prague."\n```'
        provider = GeminiHintProvider(gemini_client=client)
        self.assertEqual(provider.generate(["matej", "anet"]), "Two names from Prague.")
        prompt = client.generate_text.call_args[0][0]
        self.assertIn("MATEJ, ANET", prompt)

    def test_revealing_hint_is_rejected(self) -> None:
        client = MagicMock()
        client.generate_text.return_value = "Anet and her friend."
        with self.assertRaises(HintError):
            GeminiHintProvider(gemini_client=client).generate(["matej", "anet"])

    def test_empty_hint_is_rejected(self) -> None:
        client = MagicMock()
        client.generate_text.return_value = "  "
        with self.assertRaises(HintError):
            GeminiHintProvider(gemini_client=client).generate(["matej"])

    def test_prompt_names_language(self) -> None:
        prompt = GeminiHintProvider.render_prompt(["cat"], language="Czech")
        self.assertIn("Czech", prompt)


class ResolveHintTests(unittest.TestCase):
    def test_primary_wins(self) -> None:
        primary = MagicMock()
        primary.generate.return_value = "Pets"
        self.assertEqual(resolve_hint(primary, [TemplateHintProvider()], ["cat", "dog"]), "Pets")

    def test_falls_back_when_primary_fails(self) -> None:
        primary = MagicMock()
        primary.generate.side_effect = RuntimeError("offline")
        hint = resolve_hint(primary, [TemplateHintProvider()], ["cat", "dog"])
        self.assertEqual(hint, "2 words: 3, 3 letters")

    def test_all_failing_raises(self) -> None:
        failing = MagicMock()
        failing.generate.side_effect = RuntimeError("offline")
        with self.assertRaises(HintError) as ctx:
            resolve_hint(None, [failing], ["cat"])
        self.assertIn("offline", str(ctx.exception))


class GeminiClientTests(unittest.TestCase):
    def make_client(self, session):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "k"}, clear=True):
            return GeminiClient(session=session)

    def test_missing_key_raises(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(RuntimeError):
                GeminiClient()

    def test_model_can_come_from_environment(self) -> None:
        with patch.dict(os.environ, {"GEMINI_API_KEY": "k", "GEMINI_MODEL": "gemini-pro"}, clear=True):
            client = GeminiClient(session=MagicMock())
        self.assertTrue(client.endpoint.endswith("/models/gemini-pro:generateContent"))

    def test_generate_text_returns_first_candidate(self) -> None:
        session = MagicMock()
        session.post.return_value.json.return_value = {
            "candidates": [{"content": {"parts": [{"text": "Pets"}]}}]
        }
        client = self.make_client(session)
        self.assertEqual(client.generate_text("hint?"), "Pets")
        session.headers.update.assert_called_once_with({"x-goog-api-key": "k"})
        _, kwargs = session.post.call_args
        self.assertEqual(kwargs["json"]["contents"][0]["parts"][0]["text"], "hint?")
        self.assertEqual(kwargs["json"]["generationConfig"]["candidateCount"], 1)

    def test_request_failure_is_wrapped(self) -> None:
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("down")
        with self.assertRaises(GeminiAPIError):
            self.make_client(session).generate_text("hint?")

    def test_http_error_reports_api_message(self) -> None:
        session = MagicMock()
        session.post.return_value.ok = False
        session.post.return_value.status_code = 403
        session.post.return_value.json.return_value = {"error": {"message": "API key not valid"}}
        with self.assertRaises(GeminiAPIError) as ctx:
            self.make_client(session).generate_text("hint?")
        self.assertIn("403", str(ctx.exception))
        self.assertIn("API key not valid", str(ctx.exception))

    def test_blocked_prompt_raises(self) -> None:
        session = MagicMock()
        session.post.return_value.json.return_value = {"promptFeedback": {"blockReason": "SAFETY"}}
        with self.assertRaises(GeminiAPIError) as ctx:
            self.make_client(session).generate_text("hint?")
        self.assertIn("SAFETY", str(ctx.exception))

    def test_missing_candidates_raise(self) -> None:
        session = MagicMock()
        session.post.return_value.json.return_value = {"candidates": []}
        with self.assertRaises(GeminiAPIError):
            self.make_client(session).generate_text("hint?")

    def test_extract_text_joins_parts(self) -> None:
        payload = {"candidates": [{"content": {"parts": [{"text": "Two "}, {"text": "pets"}]}}]}
        self.assertEqual(GeminiClient.extract_text(payload), "Two pets")

    def test_extract_text_skips_empty_candidates(self) -> None:
        payload = {"candidates": [{"content": {"parts": [{"text": ""}]}}, {"content": {"parts": [{"text": "ok"}]}}]}
        self.assertEqual(GeminiClient.extract_text(payload), "ok")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
