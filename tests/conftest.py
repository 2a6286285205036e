"""
Pytest 公共夹具：共享的演示文稿输入样例。
"""

import pytest


@pytest.fixture
def minimal_input() -> str:
    return "# Hello\n\nWorld"


@pytest.fixture
def frontmatter_input() -> str:
    return (
        "---\n"
        "title: My Presentation\n"
        "author: Jane Doe\n"
        "theme: dark\n"
        "aspect-ratio: 4:3\n"
        "accent-color: #E11D48\n"
        "---\n"
        "\n"
        "# Welcome\n"
        "\n"
        "Opening slide content"
    )


@pytest.fixture
def multi_slide_input() -> str:
    return (
        "# Title Slide\n"
        "\n"
        "---\n"
        "\n"
        "# Content Slide\n"
        "\n"
        "- Bullet one\n"
        "- Bullet two\n"
        "- Bullet three\n"
        "\n"
        "---\n"
        "\n"
        "# Section Divider"
    )


@pytest.fixture
def image_deck() -> str:
    return (
        "# Gallery\n"
        "\n"
        "![stock: business meeting](horizontal)\n"
        "\n"
        "---\n"
        "\n"
        "# Future\n"
        "\n"
        "![ai-photo: futuristic city]()\n"
        "![hero](hero.jpg)\n"
        "\n"
        "---\n"
        "\n"
        "![stock: mountains](vertical)"
    )
