"""
Career assistant chatbot - canned replies picked by keyword.

No model is called; the first matching topic wins, in the order below.
"""

from typing import Tuple

GREETING = (
    "Hello! I'm your AI Career Assistant. I can help you with resume guidance, "
    "interview preparation, career roadmaps, and skill gap analysis. "
    "How can I assist you today?"
)

RESPONSES = {
    "resume": (
        "For a strong resume, focus on: 1) Clear formatting with consistent fonts, "
        "2) Quantifiable achievements, 3) Relevant skills matching job descriptions, "
        "4) Action verbs to describe experience. Would you like specific advice for your industry?"
    ),
    "interview": (
        "Great interview preparation tips: 1) Research the company thoroughly, "
        "2) Practice STAR method for behavioral questions, 3) Prepare questions to ask "
        "the interviewer, 4) Review common technical questions for your field. "
        "What specific interview type are you preparing for?"
    ),
    "skills": (
        "To identify skill gaps, I recommend: 1) Compare your current skills with job "
        "postings in your target role, 2) Take skill assessments on platforms like "
        "LinkedIn Learning, 3) Seek feedback from mentors, 4) Review industry "
        "certifications that could boost your profile."
    ),
    "career": (
        "Building a career roadmap involves: 1) Define your 5-year goal, 2) Identify "
        "required skills and experiences, 3) Set quarterly milestones, 4) Build a "
        "network in your target industry. What career path interests you?"
    ),
}

FALLBACK = (
    "I understand you're asking about career guidance. Could you be more specific? "
    "I can help with resume tips, interview preparation, skill development, or career planning."
)

# (topic, keywords) checked in order
TOPIC_KEYWORDS = [
    ("resume", ("resume", "cv")),
    ("interview", ("interview",)),
    ("skills", ("skill",)),
    ("career", ("career", "path", "roadmap")),
]


def reply_to(message: str) -> Tuple[str, str]:
    """Return (topic, reply). Topic is "general" for the fallback."""
    lower = message.lower()
    for topic, keywords in TOPIC_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return topic, RESPONSES[topic]
    return "general", FALLBACK
