from conftest import auth_headers, signup


FRONTEND = {
    "role": "Frontend Intern",
    "description": "Build dashboards in React",
    "required_skills": ["react", "express"],
    "difficulty": "Beginner",
    "type": "Remote",
    "duration": "3 months",
    "stipend": "10000/month",
    "location": "Bangalore",
}

DATA = {
    "role": "Data Intern",
    "description": "SQL reporting",
    "required_skills": ["Python", "SQL", "Excel"],
    "difficulty": "Intermediate",
    "type": "Hybrid",
}


def post_internship(client, company, body):
    r = client.post("/api/internships", headers=company["headers"], json=body)
    assert r.status_code == 201, r.text
    return r.json()


def add_skills(client, student, *skills):
    for skill in skills:
        r = client.post("/api/students/skills", headers=student["headers"], json={"skill_name": skill})
        assert r.status_code == 201, r.text


# ============================================================
# POSTING
# ============================================================

def test_create_internship(client, company, mongo):
    created = post_internship(client, company, FRONTEND)
    assert created["company_id"] == company["uid"]
    assert created["company_name"] == "Acme Labs"
    assert created["applicants"] == []

    profile = mongo["companies"].find_one({"uid": company["uid"]})
    assert profile["internships_posted"] == [created["id"]]


def test_internship_requires_a_skill(client, company):
    r = client.post("/api/internships", headers=company["headers"], json=dict(FRONTEND, required_skills=[" "]))
    assert r.status_code == 422
    assert "Please add at least one required skill" in r.text


def test_students_cannot_post(client, student):
    r = client.post("/api/internships", headers=student["headers"], json=FRONTEND)
    assert r.status_code == 403


def test_list_and_filter(client, company):
    post_internship(client, company, FRONTEND)
    post_internship(client, company, DATA)

    assert len(client.get("/api/internships").json()) == 2

    r = client.get("/api/internships", params={"type": "Hybrid"})
    assert [i["role"] for i in r.json()] == ["Data Intern"]

    r = client.get("/api/internships", params={"search": "react"})
    assert [i["role"] for i in r.json()] == ["Frontend Intern"]

    r = client.get("/api/internships", params={"search": "acme"})
    assert len(r.json()) == 2


def test_search_matches_required_skills(client, company, student):
    platform = post_internship(client, company, {
        "role": "Platform Intern",
        "description": "Build things",
        "required_skills": ["Docker", "Kubernetes"],
    })
    post_internship(client, company, DATA)

    r = client.get("/api/internships", params={"search": "docker"})
    assert [i["id"] for i in r.json()] == [platform["id"]]

    r = client.get("/api/internships/matches", headers=student["headers"], params={"search": "KUBER"})
    assert [m["internship"]["id"] for m in r.json()] == [platform["id"]]


def test_update_and_delete_owner_only(client, company):
    created = post_internship(client, company, FRONTEND)
    other = signup(client, email="other@example.com", role="company", name="Other Co")
    other_headers = auth_headers(other["access_token"])

    r = client.put(f"/api/internships/{created['id']}", headers=other_headers, json={"stipend": "0"})
    assert r.status_code == 404

    r = client.put(f"/api/internships/{created['id']}", headers=company["headers"], json={"stipend": "15000/month"})
    assert r.status_code == 200, r.text
    assert r.json()["stipend"] == "15000/month"

    assert client.delete(f"/api/internships/{created['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/internships/{created['id']}", headers=company["headers"]).status_code == 200
    assert client.get(f"/api/internships/{created['id']}").status_code == 404


def test_unknown_internship(client):
    assert client.get("/api/internships/not-an-id").status_code == 404


# ============================================================
# MATCHING AND APPLYING
# ============================================================

def test_matches_ranked_for_student(client, company, student):
    frontend = post_internship(client, company, FRONTEND)
    data = post_internship(client, company, DATA)
    add_skills(client, student, "Python", "SQL")

    r = client.get("/api/internships/matches", headers=student["headers"])
    assert r.status_code == 200, r.text
    matches = r.json()

    assert [m["internship"]["id"] for m in matches] == [data["id"], frontend["id"]]
    top = matches[0]["match"]
    # 2/3 * 70 + 20% * 15 + 20% * 15 = 52.67
    assert top["score"] == 53
    assert top["matched_skills"] == ["Python", "SQL"]
    assert top["reasons"] == ["2/3 skills matched"]
    assert matches[1]["match"]["score"] == 6
    assert all(m["already_applied"] is False for m in matches)


def test_matches_without_skills_are_zero(client, company, student):
    post_internship(client, company, FRONTEND)
    matches = client.get("/api/internships/matches", headers=student["headers"]).json()
    assert matches[0]["match"] == {"score": 0, "reasons": [], "matched_skills": []}


def test_apply_snapshot_and_duplicate(client, company, student):
    internship = post_internship(client, company, FRONTEND)
    add_skills(client, student, "React", "Node.js")

    r = client.post(f"/api/internships/{internship['id']}/apply", headers=student["headers"])
    assert r.status_code == 201, r.text
    application = r.json()
    # completion 20, readiness 20: 35 + 3 + 3
    assert application["match_score"] == 41
    assert application["match_reasons"] == ["1/2 skills matched"]
    assert application["status"] == "Applied"
    assert application["internship_role"] == "Frontend Intern"

    r = client.post(f"/api/internships/{internship['id']}/apply", headers=student["headers"])
    assert r.status_code == 400
    assert r.json()["detail"] == "Already applied to this internship"

    assert client.get(f"/api/internships/{internship['id']}").json()["applicants"] == [student["uid"]]

    matches = client.get("/api/internships/matches", headers=student["headers"]).json()
    assert matches[0]["already_applied"] is True

    mine = client.get("/api/students/applications", headers=student["headers"]).json()
    assert len(mine) == 1
    assert mine[0]["company_name"] == "Acme Labs"


def test_snapshot_survives_profile_changes(client, company, student):
    internship = post_internship(client, company, FRONTEND)
    add_skills(client, student, "React")
    client.post(f"/api/internships/{internship['id']}/apply", headers=student["headers"])

    add_skills(client, student, "Express")
    mine = client.get("/api/students/applications", headers=student["headers"]).json()
    assert mine[0]["match_reasons"] == ["1/2 skills matched"]


def test_apply_to_missing_internship(client, student):
    r = client.post("/api/internships/000000000000000000000000/apply", headers=student["headers"])
    assert r.status_code == 404


def test_companies_cannot_apply(client, company):
    internship = post_internship(client, company, FRONTEND)
    r = client.post(f"/api/internships/{internship['id']}/apply", headers=company["headers"])
    assert r.status_code == 403


# ============================================================
# RECOMMENDATIONS
# ============================================================

def test_recommendations(client, company, student):
    post_internship(client, company, FRONTEND)
    data = post_internship(client, company, DATA)
    post_internship(client, company, dict(DATA, role="Go Intern", required_skills=["Go"]))
    add_skills(client, student, "python", "sql")

    r = client.get("/api/recommendations", headers=student["headers"])
    assert r.status_code == 200, r.text
    body = r.json()

    # profile completion alone keeps the other two above zero
    assert body["total"] == 3
    rec = body["recommendations"][0]
    assert rec["internship_id"] == data["id"]
    assert rec["matched_skills"] == ["Python", "SQL"]
    # 46.67 + 20% * 15
    assert rec["match_score"] == 50
    assert [r["match_score"] for r in body["recommendations"][1:]] == [3, 3]


def test_recommendations_empty_without_skills(client, company, student):
    post_internship(client, company, FRONTEND)
    r = client.get("/api/recommendations", headers=student["headers"])
    assert r.json() == {"recommendations": [], "total": 0}


def test_recommendations_top_n(client, company, student):
    for i in range(5):
        post_internship(client, company, dict(DATA, role=f"Data Intern {i}"))
    add_skills(client, student, "Python")

    assert client.get("/api/recommendations", headers=student["headers"]).json()["total"] == 3
    r = client.get("/api/recommendations", headers=student["headers"], params={"top_n": 5})
    assert r.json()["total"] == 5
