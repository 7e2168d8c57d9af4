import pytest

from audit_engine.phrases import PhraseCatalog

KEYWORD = "emergency plumber"


def make_body(blocks: int = 50, filler: int = 48) -> str:
    """One keyword mention per block of ``filler + 2`` words."""
    block = " ".join([KEYWORD] + ["service"] * filler)
    return " ".join([block] * blocks)


@pytest.fixture
def strong_page():
    """A well-built page: 2500 words, keyword everywhere, clean technicals."""
    return {
        "url": "https://example.com/emergency-plumber-paris",
        "title": "Emergency Plumber in Paris | Fast 24/7 Repairs",
        "description": (
            "Need an emergency plumber in Paris? Our licensed team fixes leaks, "
            "burst pipes and blocked drains around the clock with upfront pricing."
        ),
        "headings": {
            "h1": ["Emergency Plumber in Paris"],
            "h2": ["Services", "Pricing", "Areas", "Reviews", "FAQ"],
            "h3": ["Leaks", "Drains", "Boilers"],
        },
        "images": 4,
        "images_missing_alt": 0,
        "internal_links": 20,
        "external_links": 3,
        "broken_links": 0,
        "load_time": 1.2,
        "word_count": 2500,
        "canonical": "https://example.com/emergency-plumber-paris",
        "body_text": make_body(),
        "technical_score": 90,
        "category": "service",
    }


@pytest.fixture
def weak_page():
    """A page with a problem in nearly every rule family."""
    return {
        "url": "https://example.com/p?id=12",
        "title": "Home",
        "headings": {"h1": ["Welcome", "Hello"], "h2": [], "h3": []},
        "images": 6,
        "images_missing_alt": 4,
        "broken_links": 2,
        "load_time": 7.5,
        "word_count": 150,
        "body_text": "We fix pipes. " * 50,
    }


@pytest.fixture
def benchmark_items():
    return [
        {"size": 1000, "title_match": True, "category": "service"},
        {"size": 1200, "title_match": True, "category": "service"},
        {"size": 1400, "title_match": True, "category": "directory"},
    ]


@pytest.fixture
def tiny_catalog():
    return PhraseCatalog(
        {
            "en": {
                "content": {
                    "title_missing": {"issue": "No title", "action": "Add a title"},
                    "h1_missing": {"issue": "No h1", "action": "Add an h1"},
                },
            },
            "fr": {
                "content": {
                    "title_missing": {"issue": "Pas de titre", "action": "Ajoutez un titre"},
                },
            },
        },
        default_locale="en",
    )


@pytest.fixture
def full_listing():
    return {
        "title": "Acme Plumbing",
        "address": "12 Rue de Rivoli, 75001 Paris",
        "phone": "+33 1 23 45 67 89",
        "url": "https://acme-plumbing.example",
        "category": "Plumber",
        "additional_categories": ["Heating contractor"],
        "description": "Family-run plumbing company. " * 12,
        "work_hours": {"timetable": {"monday": [{"open": "08:00", "close": "18:00"}]}},
        "total_photos": 32,
        "rating": {"value": 4.7, "votes_count": 120},
        "attributes": {"available_attributes": {"payments": ["cards"]}},
    }


@pytest.fixture
def local_pack():
    return [
        {
            "title": "Rival Plumbing",
            "rating": {"value": 4.8},
            "reviews_count": 120,
            "address": "1 Rue A, Paris",
            "phone": "+33 1 00 00 00 01",
            "website": "https://rival.example",
            "category": "Plumber",
        },
        {
            "title": "Acme Plumbing Paris",
            "rating": {"value": 4.2},
            "reviews_count": 15,
            "address": "12 Rue de Rivoli, Paris",
            "phone": "+33 1 23 45 67 89",
            "category": "Plumber",
        },
        {
            "title": "Other Plumbers",
            "rating": {"value": 4.5},
            "reviews_count": 60,
            "category": "Plumber",
        },
    ]
