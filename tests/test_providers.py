import base64
import pathlib
import sys
import unittest
from types import SimpleNamespace
from unittest import mock

import httpx
import openai
from google.genai import errors as genai_errors

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "scripts"))

from poster_image_api.core.config import default_config
from poster_image_api.core.contracts import GenerationRequest
from poster_image_api.core.errors import ProviderError
from poster_image_api.providers import resolve_provider_adapter
from poster_image_api.providers.gemini import GeminiAdapter
from poster_image_api.providers.grok import API_URL, GrokAdapter
from poster_image_api.providers.openai import SIZE_SQUARE, SIZE_TALL, SIZE_WIDE, OpenAIAdapter, map_size


IMAGE = b"\x89PNG\r\n\x1a\nimage-bytes"
ENCODED = base64.b64encode(IMAGE).decode("ascii")


def _request(width: int = 1080, height: int = 1080) -> GenerationRequest:
    return GenerationRequest(prompt="Poster for a picnic", width=width, height=height, style_id="tjc-style")


class TestOpenAISizeMapping(unittest.TestCase):
    def test_buckets(self) -> None:
        self.assertEqual(map_size(3000, 1000), SIZE_WIDE)
        self.assertEqual(map_size(1000, 3000), SIZE_TALL)
        self.assertEqual(map_size(1080, 1080), SIZE_SQUARE)

    def test_boundaries_are_strict(self) -> None:
        self.assertEqual(map_size(1500, 1000), SIZE_SQUARE)
        self.assertEqual(map_size(670, 1000), SIZE_SQUARE)

    def test_stock_sizes(self) -> None:
        self.assertEqual(map_size(2480, 3508), SIZE_SQUARE)
        self.assertEqual(map_size(1080, 1920), SIZE_TALL)
        self.assertEqual(map_size(1200, 630), SIZE_WIDE)


class TestOpenAIAdapter(unittest.TestCase):
    def test_generate_request_shape(self) -> None:
        client = mock.Mock()
        client.images.generate.return_value = SimpleNamespace(data=[SimpleNamespace(b64_json=ENCODED)])
        adapter = OpenAIAdapter("key", client=client)
        image = adapter.generate(_request(1080, 1920))
        self.assertEqual(image.image_bytes, IMAGE)
        self.assertEqual(image.mime_type, "image/png")
        self.assertRegex(image.filename, r"^poster-\d+\.png$")
        client.images.generate.assert_called_once_with(
            model="dall-e-3",
            prompt="Poster for a picnic",
            n=1,
            size=SIZE_TALL,
            response_format="b64_json",
            quality="hd",
        )

    def test_dall_e_2_request_shape(self) -> None:
        client = mock.Mock()
        client.images.generate.return_value = SimpleNamespace(data=[SimpleNamespace(b64_json=ENCODED)])
        OpenAIAdapter("key", "dall-e-2", client=client).generate(_request(1200, 630))
        client.images.generate.assert_called_once_with(
            model="dall-e-2",
            prompt="Poster for a picnic",
            n=1,
            size=SIZE_SQUARE,
            response_format="b64_json",
        )

    def test_empty_data_raises(self) -> None:
        client = mock.Mock()
        client.images.generate.return_value = SimpleNamespace(data=[])
        with self.assertRaises(ProviderError) as ctx:
            OpenAIAdapter("key", client=client).generate(_request())
        self.assertIn("No image data", str(ctx.exception))

    def test_status_error_includes_status_and_body(self) -> None:
        response = httpx.Response(
            500,
            text='{"error": "server exploded"}',
            request=httpx.Request("POST", "https://api.openai.com/v1/images/generations"),
        )
        client = mock.Mock()
        client.images.generate.side_effect = openai.InternalServerError("server exploded", response=response, body=None)
        with self.assertRaises(ProviderError) as ctx:
            OpenAIAdapter("key", client=client).generate(_request())
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn("OpenAI API error: 500", str(ctx.exception))
        self.assertIn("server exploded", str(ctx.exception))


class TestGrokAdapter(unittest.TestCase):
    def _session(self, response) -> mock.Mock:
        session = mock.Mock()
        session.post.return_value = response
        return session

    def test_generate_request_shape(self) -> None:
        response = mock.Mock(ok=True, status_code=200)
        response.json.return_value = {"data": [{"b64_json": ENCODED}]}
        session = self._session(response)
        image = GrokAdapter("xai-key", session=session).generate(_request(3508, 2480))
        self.assertEqual(image.image_bytes, IMAGE)
        self.assertEqual(image.mime_type, "image/png")
        args, kwargs = session.post.call_args
        self.assertEqual(args, (API_URL,))
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer xai-key")
        self.assertEqual(
            kwargs["json"],
            {"model": "grok-2-image", "prompt": "Poster for a picnic", "n": 1, "response_format": "b64_json"},
        )

    def test_http_error(self) -> None:
        response = mock.Mock(ok=False, status_code=500, text="upstream timeout")
        with self.assertRaises(ProviderError) as ctx:
            GrokAdapter("xai-key", session=self._session(response)).generate(_request())
        self.assertEqual(str(ctx.exception), "Grok API error: 500 - upstream timeout")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_missing_data(self) -> None:
        response = mock.Mock(ok=True, status_code=200)
        response.json.return_value = {"data": []}
        with self.assertRaises(ProviderError):
            GrokAdapter("xai-key", session=self._session(response)).generate(_request())


def _gemini_response(*parts):
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


class TestGeminiAdapter(unittest.TestCase):
    def test_first_inline_image_is_returned(self) -> None:
        client = mock.Mock()
        client.models.generate_content.return_value = _gemini_response(
            SimpleNamespace(text="Here is your poster", inline_data=None),
            SimpleNamespace(inline_data=SimpleNamespace(data=IMAGE, mime_type="image/jpeg")),
            SimpleNamespace(inline_data=SimpleNamespace(data=b"second", mime_type="image/png")),
        )
        image = GeminiAdapter("key", client=client).generate(_request())
        self.assertEqual(image.image_bytes, IMAGE)
        self.assertEqual(image.mime_type, "image/jpeg")
        kwargs = client.models.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "gemini-2.5-flash-image")
        self.assertEqual(kwargs["contents"][0].parts[0].text, "Poster for a picnic")

    def test_default_mime_type(self) -> None:
        client = mock.Mock()
        client.models.generate_content.return_value = _gemini_response(
            SimpleNamespace(inline_data=SimpleNamespace(data=IMAGE, mime_type=None)),
        )
        image = GeminiAdapter("key", client=client).generate(_request())
        self.assertEqual(image.mime_type, "image/png")

    def test_no_candidates(self) -> None:
        client = mock.Mock()
        client.models.generate_content.return_value = SimpleNamespace(candidates=[])
        with self.assertRaises(ProviderError) as ctx:
            GeminiAdapter("key", name="nano-banana-pro", label="Nano Banana Pro", client=client).generate(_request())
        self.assertEqual(str(ctx.exception), "No candidates in Nano Banana Pro response")

    def test_text_only_response(self) -> None:
        client = mock.Mock()
        client.models.generate_content.return_value = _gemini_response(
            SimpleNamespace(text="I cannot draw that", inline_data=None),
        )
        with self.assertRaises(ProviderError) as ctx:
            GeminiAdapter("key", client=client).generate(_request())
        self.assertEqual(str(ctx.exception), "No image data found in Gemini response")

    def test_imagen_model_uses_generate_images(self) -> None:
        client = mock.Mock()
        client.models.generate_images.return_value = SimpleNamespace(
            generated_images=[SimpleNamespace(image=SimpleNamespace(image_bytes=IMAGE, mime_type="image/jpeg"))]
        )
        image = GeminiAdapter("key", "imagen-4.0-generate-001", client=client).generate(_request())
        self.assertEqual(image.image_bytes, IMAGE)
        self.assertEqual(image.mime_type, "image/jpeg")
        client.models.generate_content.assert_not_called()
        kwargs = client.models.generate_images.call_args.kwargs
        self.assertEqual(kwargs["model"], "imagen-4.0-generate-001")
        self.assertEqual(kwargs["prompt"], "Poster for a picnic")
        self.assertEqual(kwargs["config"].number_of_images, 1)

    def test_imagen_without_images(self) -> None:
        client = mock.Mock()
        client.models.generate_images.return_value = SimpleNamespace(generated_images=[])
        with self.assertRaises(ProviderError) as ctx:
            GeminiAdapter("key", "imagen-4.0-generate-001", client=client).generate(_request())
        self.assertEqual(str(ctx.exception), "No image data found in Gemini response")

    def test_api_error_includes_status_and_body(self) -> None:
        client = mock.Mock()
        client.models.generate_content.side_effect = genai_errors.ClientError(
            400,
            {"error": {"code": 400, "message": "bad prompt", "status": "INVALID_ARGUMENT"}},
        )
        with self.assertRaises(ProviderError) as ctx:
            GeminiAdapter("key", client=client).generate(_request())
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIn("Gemini API error: 400", str(ctx.exception))
        self.assertIn("bad prompt", str(ctx.exception))


class TestEveryOfferedModel(unittest.TestCase):
    """Each model a provider lists must get a request shape it can serve."""

    CREDENTIALS = {"GEMINI_API_KEY": "g", "GROK_API_KEY": "x", "OPENAI_API_KEY": "o"}

    def _attach_client(self, adapter):
        client = mock.Mock()
        if isinstance(adapter, GeminiAdapter):
            client.models.generate_content.return_value = _gemini_response(
                SimpleNamespace(inline_data=SimpleNamespace(data=IMAGE, mime_type="image/png")),
            )
            client.models.generate_images.return_value = SimpleNamespace(
                generated_images=[SimpleNamespace(image=SimpleNamespace(image_bytes=IMAGE, mime_type="image/png"))]
            )
            adapter._genai_client = client
        elif isinstance(adapter, OpenAIAdapter):
            client.images.generate.return_value = SimpleNamespace(data=[SimpleNamespace(b64_json=ENCODED)])
            adapter._openai_client = client
        else:
            response = mock.Mock(ok=True, status_code=200)
            response.json.return_value = {"data": [{"b64_json": ENCODED}]}
            client.post.return_value = response
            adapter._session = client
        return client

    def test_each_model_round_trips(self) -> None:
        config = default_config()
        for provider, descriptor in config.providers.items():
            for model in descriptor.available_models:
                with self.subTest(provider=provider, model=model):
                    adapter = resolve_provider_adapter(
                        provider, config, lambda name: self.CREDENTIALS.get(name), model=model
                    )
                    self.assertEqual(adapter.model, model)
                    client = self._attach_client(adapter)
                    image = adapter.generate(_request(1200, 630))
                    self.assertEqual(image.image_bytes, IMAGE)
                    if isinstance(adapter, GeminiAdapter):
                        if model.startswith("imagen-"):
                            client.models.generate_images.assert_called_once()
                            client.models.generate_content.assert_not_called()
                        else:
                            client.models.generate_content.assert_called_once()
                            client.models.generate_images.assert_not_called()
                    elif isinstance(adapter, OpenAIAdapter):
                        kwargs = client.images.generate.call_args.kwargs
                        if model == "dall-e-2":
                            self.assertEqual(kwargs["size"], SIZE_SQUARE)
                            self.assertNotIn("quality", kwargs)
                        else:
                            self.assertEqual(kwargs["size"], SIZE_WIDE)
                            self.assertEqual(kwargs["quality"], "hd")
                    else:
                        self.assertEqual(client.post.call_args.kwargs["json"]["model"], model)


if __name__ == "__main__":
    unittest.main()
