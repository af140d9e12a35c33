"""
API tests for the matching and config version routes.
"""

from matching.models import ClientGoal, ClientGoalSpecialtyMapping


def _trainer(trainer_id, **fields):
    body = {
        "id": trainer_id,
        "name": f"Trainer {trainer_id}",
        "specialties": ["Weight Loss Coaching"],
        "training_vibe": "Supportive",
        "delivery_format": ["online"],
        "hourly_rate": 60,
        "rating": 4.8,
    }
    body.update(fields)
    return body


PREFERENCES = {
    "survey": {
        "primary_goals": ["weight_loss"],
        "training_location_preference": "online",
        "preferred_coaching_style": ["nurturing"],
        "preferred_training_frequency": 3,
        "trainer_gender_preference": "female",
    }
}


def test_health(client):
    response = client.get("/matches/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_match_request_with_default_config(client):
    response = client.post("/matches", json={
        "trainers": [_trainer("f1", gender="female"), _trainer("m1", gender="male")],
        "client_preferences": PREFERENCES,
        "seed": 7,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["has_matches"] is True
    assert [m["trainer"]["id"] for m in data["all_trainers"]] == ["f1"]
    assert data["all_trainers"][0]["score"] == 78
    assert data["excluded_trainers"][0]["exclusion_type"] == "gender"
    assert data["exclusion_summary"] == {"gender": 1, "format": 0, "budget": 0, "availability": 0, "total": 1}


def test_match_request_without_preferences(client):
    response = client.post("/matches", json={"trainers": [_trainer("a"), _trainer("b")], "seed": 3})

    assert response.status_code == 200
    scores = [m["score"] for m in response.json()["all_trainers"]]
    assert len(scores) == 2
    assert all(50 <= s < 70 for s in scores)


def test_invalid_payload_rejected(client):
    response = client.post("/matches", json={"client_preferences": PREFERENCES})
    assert response.status_code == 422


def test_published_config_drives_matching(client):
    created = client.post("/matching-versions", json={
        "name": "No exclusions",
        "config": {"feature_flags": {"enable_hard_exclusions": False}},
    })
    assert created.status_code == 201
    version_id = created.json()["id"]

    published = client.post(f"/matching-versions/{version_id}/publish")
    assert published.status_code == 200
    assert published.json()["status"] == "live"

    response = client.post("/matches", json={
        "trainers": [_trainer("m1", gender="male")],
        "client_preferences": PREFERENCES,
    })
    data = response.json()
    assert data["excluded_trainers"] == []
    # 77.75 * 0.3 gender penalty, then floored
    assert data["all_trainers"][0]["score"] == 45


def test_version_lifecycle(client):
    v1 = client.post("/matching-versions", json={"name": "Launch"}).json()
    client.post(f"/matching-versions/{v1['id']}/publish")

    rejected = client.patch(f"/matching-versions/{v1['id']}", json={"notes": "edit live"})
    assert rejected.status_code == 409

    clone = client.post(f"/matching-versions/{v1['id']}/clone")
    assert clone.status_code == 201
    assert clone.json()["notes"] == "Cloned from v1"
    assert clone.json()["version_number"] == 2

    updated = client.patch(f"/matching-versions/{clone.json()['id']}", json={
        "config": {"weights": {"goals_specialties": {"value": 40, "min": 10, "max": 40}}},
    })
    assert updated.status_code == 200
    assert updated.json()["config"]["weights"]["goals_specialties"]["value"] == 40

    live = client.get("/matching-versions/live")
    assert live.json()["id"] == v1["id"]

    listed = client.get("/matching-versions").json()
    assert [v["version_number"] for v in listed] == [2, 1]

    assert client.delete(f"/matching-versions/{clone.json()['id']}").status_code == 204
    assert client.delete(f"/matching-versions/{v1['id']}").status_code == 409


def test_unknown_version_is_404(client):
    assert client.get("/matching-versions/999").status_code == 404
    assert client.post("/matching-versions/999/publish").status_code == 404
    assert client.get("/matching-versions/live").status_code == 404


def test_goal_mappings_endpoint(client, session_scope):
    with session_scope() as db:
        goal = ClientGoal(goal_key="flexibility", label="Move better")
        goal.specialty_mappings = [ClientGoalSpecialtyMapping(specialty="Yoga", mapping_type="optional")]
        db.add(goal)

    response = client.get("/matches/goal-mappings")

    assert response.status_code == 200
    assert response.json() == {"flexibility": [{"specialty": "Yoga", "weight": 30, "mapping_type": "optional"}]}


def test_version_response_shows_total_weight(client):
    created = client.post("/matching-versions", json={
        "name": "Heavier goals",
        "config": {"weights": {"goals_specialties": {"value": 40}, "location_format": {"value": 20}}},
    })

    assert created.status_code == 201
    assert created.json()["config"]["total_weight"] == 60
    assert client.get(f"/matching-versions/{created.json()['id']}").json()["config"]["total_weight"] == 60


def test_raised_floor_reaches_browse_mode(client):
    version_id = client.post("/matching-versions", json={
        "name": "High floor",
        "config": {"thresholds": {"minimum_baseline_score": 80}},
    }).json()["id"]
    client.post(f"/matching-versions/{version_id}/publish")

    response = client.post("/matches", json={"trainers": [_trainer("a"), _trainer("b")], "seed": 3})

    assert [m["score"] for m in response.json()["all_trainers"]] == [80, 80]


def test_exclusion_rules_endpoint(client):
    response = client.get("/matches/exclusion-rules")

    assert response.status_code == 200
    rules = response.json()
    assert [r["id"] for r in rules] == ["gender", "format", "budget", "availability"]
    budget = rules[2]
    assert budget["configurable"] is True
    assert budget["config_key"] == "budget.hard_exclusion_percent"


# =============================================================================
# PRODUCTION DEPENDENCY WIRING (no overrides)
# =============================================================================

def test_wired_match_request(wired_client):
    response = wired_client.post("/matches", json={
        "trainers": [_trainer("f1", gender="female"), _trainer("m1", gender="male")],
        "client_preferences": PREFERENCES,
        "seed": 7,
    })

    assert response.status_code == 200
    assert [m["trainer"]["id"] for m in response.json()["all_trainers"]] == ["f1"]


def test_wired_version_writes_persist(wired_client):
    created = wired_client.post("/matching-versions", json={
        "name": "No exclusions",
        "config": {"feature_flags": {"enable_hard_exclusions": False}},
    })
    assert created.status_code == 201
    version_id = created.json()["id"]

    published = wired_client.post(f"/matching-versions/{version_id}/publish")
    assert published.status_code == 200

    assert wired_client.get("/matching-versions/live").json()["id"] == version_id
    assert wired_client.patch(f"/matching-versions/{version_id}", json={"notes": "x"}).status_code == 409

    response = wired_client.post("/matches", json={
        "trainers": [_trainer("m1", gender="male")],
        "client_preferences": PREFERENCES,
    })
    assert response.status_code == 200
    assert response.json()["excluded_trainers"] == []
