from conftest import complete_round1, complete_round2, register_team

from neurovia.config import DEFAULT_CHALLENGE_LINKS


def _ready_for_round3(client, name="Logic Gates"):
    team_id = register_team(client, name)
    complete_round1(client, team_id)
    complete_round2(client, team_id)
    return team_id


def test_challenge_requires_round2(client):
    team_id = register_team(client)
    complete_round1(client, team_id)
    resp = client.get(f"/api/round3/challenge/{team_id}")
    assert resp.status_code == 412
    assert resp.json()["detail"] == "Team must complete Round 2 first"


def test_challenge_link_for_sector(client):
    team_id = _ready_for_round3(client)
    sector = client.get(f"/api/teams/{team_id}").json()["sector"]
    body = client.get(f"/api/round3/challenge/{team_id}").json()
    assert body == {"sector": sector, "challenge_link": DEFAULT_CHALLENGE_LINKS[sector], "time_limit": 30}


def test_submit_scores_and_awaits_verification(client):
    team_id = _ready_for_round3(client)
    before = client.get(f"/api/teams/{team_id}").json()["total_score"]

    resp = client.post("/api/round3/submit", json={"team_id": team_id, "test_cases_passed": 10, "time_taken": 12})
    assert resp.status_code == 200
    body = resp.json()
    assert body["time_bonus"] == 18
    assert body["final_score"] == 28
    assert body["total_score"] == before + 28
    assert body["awaiting_verification"] is True

    round3 = client.get(f"/api/round3/team/{team_id}").json()
    assert round3["submitted"] is True
    assert round3["admin_verified"] is False
    assert round3["challenge_link"].startswith("https://unstop.com/")


def test_submit_out_of_range(client):
    team_id = _ready_for_round3(client)
    too_many = client.post("/api/round3/submit", json={"team_id": team_id, "test_cases_passed": 11, "time_taken": 5})
    assert too_many.status_code == 400
    assert too_many.json()["detail"] == "Test cases passed must be between 0 and 10"

    too_slow = client.post("/api/round3/submit", json={"team_id": team_id, "test_cases_passed": 5, "time_taken": 31})
    assert too_slow.status_code == 400
    assert too_slow.json()["detail"] == "Time taken must be between 0 and 30 minutes"


def test_submit_before_round2(client):
    team_id = register_team(client)
    resp = client.post("/api/round3/submit", json={"team_id": team_id, "test_cases_passed": 5, "time_taken": 5})
    assert resp.status_code == 412


def test_verify_needs_admin(client):
    team_id = _ready_for_round3(client)
    resp = client.put(f"/api/round3/verify/{team_id}", json={"verified": True})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Not authorized, no token"


def test_verify_before_submission(admin_client):
    team_id = _ready_for_round3(admin_client)
    resp = admin_client.put(f"/api/round3/verify/{team_id}", json={"verified": True})
    assert resp.status_code == 412
    assert resp.json()["detail"] == "Team has not submitted Round 3 yet"


def test_verify_with_adjusted_score(admin_client):
    team_id = _ready_for_round3(admin_client)
    admin_client.post("/api/round3/submit", json={"team_id": team_id, "test_cases_passed": 10, "time_taken": 12})
    team = admin_client.get(f"/api/teams/{team_id}").json()

    resp = admin_client.put(f"/api/round3/verify/{team_id}", json={"verified": True, "adjusted_score": 40})
    assert resp.status_code == 200
    body = resp.json()
    assert body["verified"] is True
    assert body["final_score"] == 40
    assert body["total_score"] == team["round1"]["final_score"] + team["round2"]["final_score"] + 40


def test_verify_rejects_negative_adjustment(admin_client):
    team_id = _ready_for_round3(admin_client)
    admin_client.post("/api/round3/submit", json={"team_id": team_id, "test_cases_passed": 1, "time_taken": 1})
    resp = admin_client.put(f"/api/round3/verify/{team_id}", json={"verified": True, "adjusted_score": -5})
    assert resp.status_code == 400


def test_resubmission_clears_verification(admin_client):
    team_id = _ready_for_round3(admin_client)
    admin_client.post("/api/round3/submit", json={"team_id": team_id, "test_cases_passed": 10, "time_taken": 12})
    admin_client.put(f"/api/round3/verify/{team_id}", json={"verified": True})
    admin_client.post("/api/round3/submit", json={"team_id": team_id, "test_cases_passed": 4, "time_taken": 20})

    round3 = admin_client.get(f"/api/round3/team/{team_id}").json()
    assert round3["admin_verified"] is False
    assert round3["final_score"] == 14
