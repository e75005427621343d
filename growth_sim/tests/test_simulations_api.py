from __future__ import annotations

from flask.testing import FlaskClient


def simulation_payload(name: str, period: int = 5) -> dict:
    return {
        "name": name,
        "parameters": {
            "initialAmount": 1000000,
            "annualRate": 3,
            "investmentPeriod": period,
            "monthlyDeposit": 30000,
            "bonusDeposit": 100000,
            "bonusMonths": [6, 12],
            "compoundFrequency": "monthly",
            "calculationType": "compound",
        },
    }


def create(client: FlaskClient, name: str, period: int = 5) -> dict:
    resp = client.post("/api/simulations", json=simulation_payload(name, period))
    assert resp.status_code == 201
    return resp.get_json()


def test_simulation_lifecycle(client: FlaskClient):
    created = create(client, "Base")
    assert created["results"]["totalPrincipal"] == 1000000 + (30000 * 12 + 200000) * 5

    listed = client.get("/api/simulations").get_json()
    assert [sim["id"] for sim in listed] == [created["id"]]

    fetched = client.get(f"/api/simulations/{created['id']}").get_json()
    assert fetched == created

    new_params = simulation_payload("ignored", period=10)["parameters"]
    patched = client.patch(
        f"/api/simulations/{created['id']}", json={"name": "Longer", "parameters": new_params}
    ).get_json()
    assert patched["name"] == "Longer"
    assert len(patched["results"]["yearlyBreakdown"]) == 10
    assert patched["createdAt"] == created["createdAt"]

    assert client.delete(f"/api/simulations/{created['id']}").status_code == 204
    assert client.delete(f"/api/simulations/{created['id']}").status_code == 404
    assert client.get(f"/api/simulations/{created['id']}").status_code == 404


def test_create_rejects_invalid_parameters(client: FlaskClient):
    payload = simulation_payload("Bad")
    payload["parameters"]["investmentPeriod"] = 60

    resp = client.post("/api/simulations", json=payload)
    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["parameters", "investmentPeriod"]


def test_simulation_export(client: FlaskClient):
    created = create(client, "Export me", period=2)

    resp = client.get(f"/api/simulations/{created['id']}/export")
    assert resp.status_code == 200
    assert f"investment_simulation_{created['id']}.csv" in resp.headers["Content-Disposition"]
    assert "Investment simulation: Export me" in resp.get_data(as_text=True)


def test_compare_and_export_comparison(client: FlaskClient):
    short = create(client, "Short", period=2)
    long = create(client, "Long", period=4)

    resp = client.get(f"/api/simulations/compare?ids={short['id']}&ids={long['id']}")
    assert resp.status_code == 200
    body = resp.get_json()
    assert [sim["name"] for sim in body["simulations"]] == ["Short", "Long"]
    assert [row["year"] for row in body["rows"]] == [1, 2, 3, 4]
    assert body["rows"][3]["entries"][0] is None

    resp = client.get(f"/api/simulations/compare/export?ids={short['id']},{long['id']}")
    assert resp.status_code == 200
    text = resp.get_data(as_text=True)
    assert "Year,Short_Principal,Short_Profit,Short_Total,Long_Principal" in text

    assert client.get("/api/simulations/compare").status_code == 400
    assert client.get(f"/api/simulations/compare?ids={short['id']}&ids=missing").status_code == 404


def test_storage_dump_and_clear(client: FlaskClient):
    created = create(client, "Keep")
    client.put("/api/settings", json={"theme": "dark", "locale": "ja", "currency": "JPY"})
    client.put("/api/form-data", json={"initialAmount": "5"})

    dump = client.get("/api/storage").get_json()
    assert dump["version"] == 1
    assert dump["settings"]["theme"] == "dark"
    assert [sim["id"] for sim in dump["simulations"]] == [created["id"]]

    assert client.delete("/api/storage").status_code == 204
    assert client.get("/api/form-data").get_json() == {"formData": None}
    assert client.get("/api/storage").get_json()["settings"] is None
    assert len(client.get("/api/simulations").get_json()) == 1
