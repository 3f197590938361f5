import random

import pytest

from matching.engine import build, load


@pytest.fixture
def abc_activity():
    return {
        "id": "act-abc",
        "type": "matching",
        "subject": "science",
        "topic": "Letters and numbers",
        "topicid": "t-leaf",
        "prompt1": "A | 1",
        "prompt2": "B | 2",
        "prompt3": "C | 3",
        "prompt4": None,
        "prompt5": "",
        "prompt6": None,
    }


@pytest.fixture
def abc_definition(abc_activity):
    return load(abc_activity)


@pytest.fixture
def abc_pools(abc_definition):
    return build(abc_definition, rng=random.Random(7))


@pytest.fixture
def sequential_activity():
    return {
        "id": "act-seq",
        "type": "Picture-Title / Title-Description",
        "subject": "science",
        "topic": "Renewable energy",
        "topicid": "t-energy",
        "prompt1": "https://upload.wikimedia.org/solar.png | Solar panel",
        "prompt2": "https://upload.wikimedia.org/wind.jpg | Wind turbine",
        "prompt3": "Solar panel | Turns sunlight into electricity",
        "prompt4": "Wind turbine | Turns moving air into electricity",
    }


@pytest.fixture
def contents():
    return {
        "3f2a9c1e-0000-4000-8000-000000000001": {
            "id": "3f2a9c1e-0000-4000-8000-000000000001",
            "title": "Volcano",
            "short_description": "A mountain that erupts lava",
            "imageid": "https://i.imgur.com/volcano.png",
        },
        "3f2a9c1e-0000-4000-8000-000000000002": {
            "id": "3f2a9c1e-0000-4000-8000-000000000002",
            "title": "Glacier",
            "short_description": "A slow river of ice",
            "imageid": "https://i.imgur.com/glacier.png",
        },
    }


@pytest.fixture
def content_lookup(contents):
    return contents.get
