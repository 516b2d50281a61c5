"""Shared test fixtures."""

import json

import pytest

from yt_summary_mcp.models import ProviderConfig, ProviderKind

VIDEO_ID = "dQw4w9WgXcQ"


def make_segment(text):
    return {
        "transcriptSegmentRenderer": {
            "snippet": {"elementsAttributedString": {"content": text}},
            "startMs": "0",
            "endMs": "1000",
        }
    }


def make_transcript_response(segments):
    return {
        "actions": [
            {
                "elementsCommand": {
                    "transformEntityCommand": {
                        "arguments": {
                            "transformTranscriptSegmentListArguments": {
                                "overwrite": {"initialSegments": segments}
                            }
                        }
                    }
                }
            }
        ]
    }


def make_panel(token):
    return {
        "engagementPanelSectionListRenderer": {
            "panelIdentifier": "engagement-panel-searchable-transcript",
            "content": {
                "continuationItemRenderer": {
                    "continuationEndpoint": {
                        "getTranscriptEndpoint": {"params": token}
                    }
                }
            },
        }
    }


def make_watch_html(initial_data, player_response=None):
    player_response = player_response or {}
    return (
        "<html><body>"
        f"<script>var ytInitialPlayerResponse = {json.dumps(player_response)};var meta = 1;</script>"
        f"<script>var ytInitialData = {json.dumps(initial_data)};</script>"
        "</body></html>"
    )


@pytest.fixture
def sample_segments():
    return [
        make_segment("Hello world"),
        make_segment("this is a test"),
        make_segment(""),
        make_segment("of the transcript"),
    ]


@pytest.fixture
def initial_data():
    return {
        "engagementPanels": [
            {"engagementPanelSectionListRenderer": {"content": {"sectionListRenderer": {}}}},
            make_panel("CgtkUXc0dzlXZ1hjUQ%3D%3D"),
        ]
    }


@pytest.fixture
def anthropic_config():
    return ProviderConfig(provider=ProviderKind.ANTHROPIC, api_key="sk-ant-test")


@pytest.fixture
def openai_config():
    return ProviderConfig(
        provider=ProviderKind.OPENAI,
        api_key="sk-test",
        base_url="https://x/v1/",
    )
