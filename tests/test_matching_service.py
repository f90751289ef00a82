import itertools

import pytest

from skillbridge.models.matching import (
    BROWSE_WEIGHTS,
    RECOMMENDATION_WEIGHTS,
    CandidateProfile,
    MatchResult,
    MatchWeights,
    OpportunityPosting,
    clean_skills,
)
from skillbridge.services.matching_service import (
    ExactSkillMatcher,
    MatchScorer,
    SubstringSkillMatcher,
    get_browse_scorer,
    get_recommendation_scorer,
    round_half_up,
)


def candidate(skills, completion=0, readiness=0, projects=None):
    return CandidateProfile(
        skills=skills,
        profile_completion=completion,
        readiness_score=readiness,
        projects=projects or []
    )


def posting(required, **extra):
    return OpportunityPosting(required_skills=required, **extra)


# ============================================================
# BROWSE / APPLY WEIGHTS
# ============================================================

def test_partial_skill_match_browse_weights():
    result = get_browse_scorer().score(
        candidate(["React", "Node.js"], completion=50, readiness=60),
        posting(["react", "express"])
    )
    # 35 + 7.5 + 9 = 51.5, rounded half up
    assert result.score == 52
    assert result.reasons == ("1/2 skills matched",)
    assert result.matched_skills == ("react",)


def test_candidate_without_skills_scores_zero():
    result = get_browse_scorer().score(
        candidate([], completion=100, readiness=100, projects=[{"title": "x"}]),
        posting(["Python"])
    )
    assert result == MatchResult()
    assert result.score == 0
    assert result.reasons == ()


def test_posting_without_required_skills():
    result = get_browse_scorer().score(
        candidate(["Python"], completion=80, readiness=40),
        posting([])
    )
    assert result.score == 18  # 12 + 6
    assert result.matched_skills == ()
    assert result.reasons == ("Complete profile boosts visibility",)


def test_full_match_with_complete_profile_is_capped_at_100():
    result = get_browse_scorer().score(
        candidate(["Python", "SQL"], completion=100, readiness=100),
        posting(["python", "sql"])
    )
    assert result.score == 100


# ============================================================
# RECOMMENDATION WEIGHTS
# ============================================================

def test_recommendation_weights_with_projects():
    result = get_recommendation_scorer().score(
        candidate(["python", "sql"], completion=100, projects=[{"title": "a"}, {"title": "b"}]),
        posting(["Python", "SQL", "Excel"])
    )
    # 46.67 + 15 + 10
    assert result.score == 72
    assert result.matched_skills == ("Python", "SQL")
    assert result.reasons == (
        "2/3 skills matched",
        "Relevant project experience",
        "Complete profile boosts visibility",
    )


def test_recommendation_ignores_readiness():
    low = get_recommendation_scorer().score(candidate(["Go"], readiness=0), posting(["Go"]))
    high = get_recommendation_scorer().score(candidate(["Go"], readiness=100), posting(["Go"]))
    assert low.score == high.score == 70


def test_many_projects_are_clamped():
    projects = [{"title": str(i)} for i in range(20)]
    result = get_recommendation_scorer().score(
        candidate(["Go"], completion=100, projects=projects),
        posting(["Go"])
    )
    assert result.score == 100


def test_zero_required_guard_applies_to_both_presets():
    for scorer in (get_browse_scorer(), get_recommendation_scorer()):
        result = scorer.score(candidate(["Go"]), posting([]))
        assert result.score == 0


# ============================================================
# SKILL MATCHING
# ============================================================

def test_substring_matching_is_bidirectional():
    matcher = SubstringSkillMatcher()
    assert matcher.matched_skills(["react"], ["React.js"]) == ["React.js"]
    assert matcher.matched_skills(["React Native"], ["react"]) == ["react"]


def test_substring_matching_short_skill_false_positive():
    assert SubstringSkillMatcher().matched_skills(["R"], ["React"]) == ["React"]


def test_exact_matcher_is_strict_but_case_insensitive():
    matcher = ExactSkillMatcher()
    assert matcher.matched_skills(["R"], ["React"]) == []
    assert matcher.matched_skills(["PYTHON"], ["Python"]) == ["Python"]


def test_scorer_accepts_custom_matcher():
    scorer = MatchScorer(BROWSE_WEIGHTS, matcher=ExactSkillMatcher())
    result = scorer.score(candidate(["React"]), posting(["React.js", "React"]))
    assert result.matched_skills == ("React",)
    assert result.score == 35


def test_blank_and_duplicate_skills_are_ignored():
    assert clean_skills([" Python ", "", "python", None, "SQL"]) == ["Python", "SQL"]
    # A blank candidate skill would otherwise be a substring of everything
    result = get_browse_scorer().score(candidate(["", "  "]), posting(["Python"]))
    assert result.score == 0


def test_required_skill_duplicates_count_once():
    result = get_browse_scorer().score(candidate(["Python"]), posting(["Python", "python"]))
    assert result.reasons[0] == "1/1 skills matched"


# ============================================================
# RANKING
# ============================================================

def test_rank_all_sorts_descending():
    postings = [posting(["Java"], id="a"), posting(["Python"], id="b"), posting(["Python", "Java"], id="c")]
    ranked = get_browse_scorer().rank_all(candidate(["Python"]), postings)
    assert [p.id for p, _ in ranked] == ["b", "c", "a"]
    assert [r.score for _, r in ranked] == [70, 35, 0]


def test_rank_all_is_stable_for_equal_scores():
    postings = [posting(["Python"], id=str(i)) for i in range(5)]
    ranked = get_browse_scorer().rank_all(candidate(["Python"]), postings)
    assert [p.id for p, _ in ranked] == ["0", "1", "2", "3", "4"]
    assert all(r.score == 70 for _, r in ranked)


def test_rank_all_empty_input():
    assert get_browse_scorer().rank_all(candidate(["Python"]), []) == []


def test_recommend_filters_zero_scores_and_limits():
    postings = [
        posting(["Java"], id="zero"),
        posting(["Python"], id="p1"),
        posting(["Python", "Go"], id="p2"),
        posting(["Python"], id="p3"),
        posting(["Python"], id="p4"),
    ]
    top = get_recommendation_scorer().recommend(candidate(["Python"]), postings)
    assert [p.id for p, _ in top] == ["p1", "p3", "p4"]

    top = get_recommendation_scorer().recommend(candidate(["Python"]), postings, top_n=10)
    assert "zero" not in [p.id for p, _ in top]
    assert len(top) == 4


def test_recommend_without_skills_is_empty():
    assert get_recommendation_scorer().recommend(candidate([]), [posting(["Python"])]) == []


# ============================================================
# INPUT HANDLING
# ============================================================

@pytest.mark.parametrize("value, expected", [
    (None, 0.0),
    ("abc", 0.0),
    (float("nan"), 0.0),
    (True, 0.0),
    (-20, 0.0),
    (150, 100.0),
    ("40", 40.0),
])
def test_percentages_are_coerced(value, expected):
    assert candidate(["x"], completion=value).profile_completion == expected


def test_candidate_from_document_with_missing_fields():
    profile = CandidateProfile.from_document({"uid": "u1"})
    assert profile.skills == []
    assert profile.projects == []
    assert profile.profile_completion == 0


CANDIDATE_SKILLS = ["react", "reactjs", "SQL", "Go"]
REQUIRED_SKILLS = ["React", "Node", "sql", "Kubernetes"]


@pytest.mark.parametrize("scorer", [get_browse_scorer(), get_recommendation_scorer()])
@pytest.mark.parametrize("skills", list(itertools.permutations(CANDIDATE_SKILLS))[::5])
@pytest.mark.parametrize("required", list(itertools.permutations(REQUIRED_SKILLS))[::7])
def test_score_does_not_depend_on_skill_order(scorer, skills, required):
    baseline = scorer.score(
        candidate(CANDIDATE_SKILLS, completion=60, readiness=40, projects=[{}]),
        posting(REQUIRED_SKILLS)
    )
    result = scorer.score(
        candidate(list(skills), completion=60, readiness=40, projects=[{}]),
        posting(list(required))
    )
    assert result.score == baseline.score
    assert result.reasons == baseline.reasons
    # matched skills follow the posting's order
    assert result.matched_skills == tuple(s for s in required if s in ("React", "sql"))


@pytest.mark.parametrize("scorer", [get_browse_scorer(), get_recommendation_scorer()])
@pytest.mark.parametrize("completion", [-50, 0, 33.3, 100, 250, None, "x"])
@pytest.mark.parametrize("readiness", [-1, 0, 66.6, 100, 1000])
@pytest.mark.parametrize("project_count", [0, 1, 7, 50])
def test_score_is_an_int_within_bounds(scorer, completion, readiness, project_count):
    for required in ([], ["Python"], ["Python", "Java", "Go"]):
        result = scorer.score(
            candidate(["Python", "Go"], completion, readiness, [{}] * project_count),
            posting(required)
        )
        assert isinstance(result.score, int)
        assert 0 <= result.score <= 100


def test_round_half_up():
    assert round_half_up(51.5) == 52
    assert round_half_up(52.5) == 53
    assert round_half_up(71.666) == 72
    assert round_half_up(0.49) == 0


def test_weight_presets_differ():
    assert BROWSE_WEIGHTS.readiness == 15 and BROWSE_WEIGHTS.per_project == 0
    assert RECOMMENDATION_WEIGHTS.readiness == 0 and RECOMMENDATION_WEIGHTS.per_project == 5


def test_custom_weights():
    scorer = MatchScorer(MatchWeights(skills=50, profile=50, readiness=0, per_project=0))
    result = scorer.score(candidate(["Go"], completion=50), posting(["Go"]))
    assert result.score == 75


def test_snapshot_shape():
    result = MatchResult(score=52, reasons=("1/2 skills matched",), matched_skills=("react",))
    assert result.snapshot() == {"match_score": 52, "match_reasons": ["1/2 skills matched"]}
