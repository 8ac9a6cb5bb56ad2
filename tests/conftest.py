"""Shared test fixtures for studio2md."""

import textwrap

import pytest

from studio2md.parser.models import ParseResult, Role, SourceMessage


SAMPLE_EXPORT = textwrap.dedent(
    '''\
    # To run this code you need to install the following dependencies:
    # pip install google-genai

    import base64
    import os
    from google import genai
    from google.genai import types


    def generate():
        client = genai.Client(
            api_key=os.environ.get("GEMINI_API_KEY"),
        )

        model = "gemini-2.5-pro"
        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text="""What is a monad?"""),
                ],
            ),
            types.Content(
                role="model",
                parts=[
                    types.Part.from_text(text="""**Defining the question**

    The user wants a short explanation."""),
                    types.Part.from_text(text="""A monad is a way to chain computations."""),
                ],
            ),
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text="""Give an example."""),
                ],
            ),
            types.Content(
                role="model",
                parts=[
                    types.Part.from_text(text="""Python's Optional chaining is close."""),
                ],
            ),
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text="""INSERT_INPUT_HERE"""),
                ],
            ),
        ]
        generate_content_config = types.GenerateContentConfig(
            thinking_config = types.ThinkingConfig(
                thinking_budget=-1,
            ),
            response_mime_type="text/plain",
            system_instruction=[
                types.Part.from_text(text="""You are a patient tutor."""),
            ],
        )

        for chunk in client.models.generate_content_stream(
            model=model,
            contents=contents,
            config=generate_content_config,
        ):
            print(chunk.text, end="")

    if __name__ == "__main__":
        generate()
    '''
)


@pytest.fixture
def sample_export():
    return SAMPLE_EXPORT


@pytest.fixture
def hello_messages():
    return [
        SourceMessage(role=Role.user, parts=["Hello"]),
        SourceMessage(role=Role.model, parts=["Hi there"]),
    ]


class FakeExtractor:
    """In-memory extractor that records calls and can be told to fail."""

    def __init__(self, result=None, init_error=None, init_hook=None):
        self.result = result or ParseResult(
            messages=[SourceMessage(role=Role.user, parts=["ping"])]
        )
        self.init_error = init_error
        self.init_hook = init_hook
        self.init_calls = 0
        self.parse_calls = []

    def initialize(self):
        self.init_calls += 1
        if self.init_hook is not None:
            self.init_hook()
        if self.init_error is not None:
            raise self.init_error

    def parse(self, source_text):
        self.parse_calls.append(source_text)
        return self.result


@pytest.fixture
def fake_extractor():
    return FakeExtractor()
