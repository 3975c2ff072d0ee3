"""
Integration tests for HTML composition with the bundled theme.
Tests: resume record -> render() -> HTML document.
"""

import copy
import json
from pathlib import Path

import pytest

from vellum import render
from vellum.contexts.templating.exceptions import InvalidResumeError

FIXTURES_PATH = Path(__file__).resolve().parents[1] / "fixtures"


@pytest.fixture
def sample_resume():
    return json.loads((FIXTURES_PATH / "sample_resume.json").read_text(encoding="utf-8"))


@pytest.mark.integration
def test_render_valid_resume(sample_resume):
    """Test that the name from the resume becomes the document title."""
    html = render(sample_resume)

    assert "<title>Richard Hendriks</title>" in html
    assert html.lstrip().startswith("<!doctype html>")


@pytest.mark.integration
@pytest.mark.parametrize("invalid", [None, "invalid input", 42, ["basics"]])
def test_render_invalid_input(invalid):
    """Test that non-mapping input is rejected."""
    with pytest.raises(InvalidResumeError, match="Expected input to be a valid resume object"):
        render(invalid)


@pytest.mark.integration
def test_render_invalid_input_before_file_access(tmp_path):
    """Test that input validation happens before the theme is read."""
    with pytest.raises(InvalidResumeError):
        render(None, theme_path=tmp_path / "missing_theme")


@pytest.mark.integration
def test_render_empty_resume():
    """Test that an empty record renders with an empty title."""
    html = render({})

    assert "<title></title>" in html
    assert "None" not in html
    assert "Work Experience" not in html


@pytest.mark.integration
@pytest.mark.parametrize("work", [5, "Hooli", {"name": "Hooli"}, True])
def test_render_wrongly_typed_collection(work):
    """Test that a collection field that is not a list renders as an absent section."""
    html = render({"basics": {"name": "Jane Doe", "profiles": 3}, "work": work, "skills": 1.5})

    assert "<title>Jane Doe</title>" in html
    assert "Work Experience" not in html
    assert "Skills" not in html


@pytest.mark.integration
def test_render_wrongly_typed_entry_lists():
    """Test that non-list highlights, keywords, courses and roles are skipped."""
    resume = {
        "work": [{"name": "Hooli", "highlights": "Shipped Nucleus"}],
        "education": [{"institution": "Stanford", "courses": 7}],
        "projects": [{"name": "Miss Direction", "roles": "Lead", "keywords": {"a": 1}}],
    }

    html = render(resume)

    assert "Hooli" in html
    assert "Stanford" in html
    assert "Miss Direction" in html
    assert "Shipped Nucleus" not in html
    assert "L, e, a, d" not in html


@pytest.mark.integration
def test_render_missing_fields():
    """Test that a record with only a name renders."""
    html = render({"basics": {"name": "Jane Doe"}})

    assert "<title>Jane Doe</title>" in html


@pytest.mark.integration
def test_render_null_fields():
    """Test that JSON nulls render as empty output."""
    html = render({"basics": {"name": None, "location": None}, "work": None})

    assert "<title></title>" in html
    assert "None" not in html


@pytest.mark.integration
def test_render_large_resume():
    """Test rendering a resume with 1000 work entries."""
    job = {
        "company": "Large Company",
        "position": "Software Engineer",
        "website": "http://example.com",
        "startDate": "2000-01-01",
        "summary": "Worked on various projects.",
        "highlights": ["Highlight 1", "Highlight 2"],
    }
    large_resume = {
        "basics": {
            "name": "Large Resume",
            "label": "Test",
            "email": "large.resume@example.com",
            "phone": "(123) 456-7890",
            "website": "http://example.com",
            "summary": "This is a large resume object.",
            "location": {
                "address": "123 Main St",
                "postalCode": "12345",
                "city": "Anytown",
                "countryCode": "US",
                "region": "CA",
            },
            "profiles": [],
        },
        "work": [job] * 1000,
        "education": [],
        "skills": [],
        "awards": [],
        "publications": [],
        "languages": [],
        "interests": [],
        "references": [],
    }

    html = render(large_resume)

    assert "<title>Large Resume</title>" in html
    assert html.count("Software Engineer") == 1000
    # Repeated employer is shown once
    assert html.count('<h3 class="entry-organisation">Large Company</h3>') == 1


@pytest.mark.integration
def test_render_special_characters():
    """Test that interpolated fields are escaped and helper output is not."""
    resume = {
        "basics": {
            "name": "Special & Ch@rs",
            "label": "<script>alert(1)</script>",
            "email": "special.chars@example.com",
            "website": "http://example.com",
        }
    }

    html = render(resume)

    assert "<title>Special &amp; Ch@rs</title>" in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "<script>" not in html
    assert '<a href="mailto:special.chars@example.com">special.chars@example.com</a>' in html
    assert '<a href="http://example.com">example.com</a>' in html


@pytest.mark.integration
def test_render_inlines_stylesheet(sample_resume):
    """Test that the stylesheet is inlined without escaping."""
    html = render(sample_resume)

    assert "<style>" in html
    assert ".entry-highlights > li" in html


@pytest.mark.integration
def test_render_contact_details(sample_resume):
    """Test helper output for the contact block."""
    html = render(sample_resume)

    assert '<a href="mailto:richard.hendriks@mail.com">' in html
    assert '<a href="http://richardhendricks.example.com">richardhendricks.example.com</a>' in html
    assert "2712 Broadway St<br/>" in html
    assert "94115" in html
    # Profile without a URL falls back to the username
    assert "neutralthoughts" in html
    assert ">soundcloud.example.com/dandymusicnl</a>" in html


@pytest.mark.integration
def test_render_formats_dates(sample_resume):
    """Test that entry dates are shown as month and year."""
    html = render(sample_resume)

    assert "Dec 2013 &ndash; Dec 2014" in html
    assert "Jun 2013 &ndash; Dec 2013" in html
    assert "Nov 2014" in html  # award date


@pytest.mark.integration
def test_render_open_ended_dates():
    """Test that an entry without an end date is shown as ongoing."""
    html = render({"work": [{"name": "Hooli", "position": "CEO", "startDate": "2019-03"}]})

    assert "Mar 2019 &ndash; Present" in html


@pytest.mark.integration
def test_render_collapses_repeated_employer(sample_resume):
    """Test that consecutive entries at the same employer show it once."""
    html = render(sample_resume)

    assert html.count('<h3 class="entry-organisation">Pied Piper') == 1
    assert html.count('<h3 class="entry-organisation">Hooli') == 1
    assert "CEO/President" in html
    assert "Founder" in html


@pytest.mark.integration
def test_render_section_order(sample_resume):
    """Test that the name precedes the section headers."""
    html = render(sample_resume)
    name_pos = html.index('<h1 class="name">Richard Hendriks</h1>')

    for header in ["Work Experience", "Education", "Skills", "Projects"]:
        assert header in html
        assert name_pos < html.index(header)


@pytest.mark.integration
def test_render_skill_level_comparison(sample_resume):
    """Test that eq() selects the top-level skill styling case-insensitively."""
    html = render(sample_resume)

    assert html.count("skill-level skill-level--top") == 2


@pytest.mark.integration
def test_render_does_not_mutate_resume(sample_resume):
    """Test that rendering leaves the input record unchanged."""
    original = copy.deepcopy(sample_resume)

    render(sample_resume)

    assert sample_resume == original


@pytest.mark.integration
def test_render_is_repeatable(sample_resume):
    """Test that repeated renders produce identical output."""
    assert render(sample_resume) == render(sample_resume)
