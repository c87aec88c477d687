from conftest import complete_round1, register_team

MEMBERS = [{"name": "Grace Hopper", "email": "Grace@Neurovia.dev"}]


def test_register_assigns_open_sector(client):
    resp = client.post("/api/teams/register", json={"team_name": "  Volt Riders ", "members": MEMBERS})
    assert resp.status_code == 201
    body = resp.json()
    assert body["team_name"] == "Volt Riders"
    assert body["sector"] in ("Lumina District", "HydroCore")
    assert body["member_count"] == 1

    team = client.get(f"/api/teams/{body['team_id']}").json()
    assert team["members"] == [{"name": "Grace Hopper", "email": "grace@neurovia.dev"}]
    assert team["total_score"] == 0
    assert team["round1"]["submitted"] is False
    assert team["round3"]["admin_verified"] is False


def test_duplicate_team_name_conflicts(client):
    register_team(client, "Signal Seekers")
    resp = client.post("/api/teams/register", json={"team_name": "Signal Seekers", "members": MEMBERS})
    assert resp.status_code == 409
    assert resp.json()["category"] == "conflict"


def test_registration_validation_errors(client):
    no_members = client.post("/api/teams/register", json={"team_name": "Lonely", "members": []})
    assert no_members.status_code == 400
    assert no_members.json()["category"] == "validation"

    bad_name = client.post(
        "/api/teams/register",
        json={"team_name": "Digits", "members": [{"name": "R2D2", "email": "r2@neurovia.dev"}]},
    )
    assert bad_name.status_code == 400

    bad_email = client.post(
        "/api/teams/register",
        json={"team_name": "Mailers", "members": [{"name": "Ada Byron", "email": "not-an-email"}]},
    )
    assert bad_email.status_code == 400


def test_lookup_by_name_and_unknown_id(client):
    team_id = register_team(client, "Flux Capacitors")
    assert client.get("/api/teams/name/Flux Capacitors").json()["id"] == team_id

    missing = client.get("/api/teams/does-not-exist")
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Team not found", "category": "not_found", "team_id": "does-not-exist"}


def test_list_teams_orders_by_total(client):
    low = register_team(client, "Low Power")
    high = register_team(client, "High Voltage")
    complete_round1(client, high)

    ids = [team["id"] for team in client.get("/api/teams").json()]
    assert ids == [high, low]
