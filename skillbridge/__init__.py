"""
SkillBridge
Internship marketplace with explainable skill-based matching.

Architecture:
- SQL: identity store (uid, email, password hash, role)
- MongoDB: role profiles, internships, applications
- Match scorer: pure, weighted, no I/O
"""

__version__ = "1.0.0"
