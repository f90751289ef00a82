import pytest

from skillbridge.services.chatbot_service import FALLBACK, RESPONSES, reply_to


@pytest.mark.parametrize("message, topic", [
    ("How do I improve my resume?", "resume"),
    ("Can you review my CV", "resume"),
    ("Tips for a technical INTERVIEW", "interview"),
    ("What skills am I missing?", "skills"),
    ("Help me plan a career roadmap", "career"),
])
def test_keyword_topics(message, topic):
    assert reply_to(message) == (topic, RESPONSES[topic])


def test_first_matching_topic_wins():
    topic, _ = reply_to("resume tips for my interview")
    assert topic == "resume"


def test_fallback():
    assert reply_to("hello there") == ("general", FALLBACK)
