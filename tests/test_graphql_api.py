import pytest

VERANSTALTER_QUERY = """
query ($id: ID!) {
  veranstalter(id: $id) {
    id
    version
    name
    art
    kategorien
    standort { ort plz }
    dokumente { titel }
    teilnehmer { nachname }
  }
}
"""

SUCHE_QUERY = """
query ($suchparameter: SuchparameterInput) {
  veranstalters(suchparameter: $suchparameter) { name aktiv standort { ort } }
}
"""

CREATE_MUTATION = """
mutation ($input: VeranstalterInput!) {
  create(input: $input) { id }
}
"""

UPDATE_MUTATION = """
mutation ($input: VeranstalterUpdateInput!) {
  update(input: $input) { version }
}
"""

DELETE_MUTATION = """
mutation ($id: ID!) {
  delete(id: $id) { success }
}
"""


async def graphql(client, query: str, variables: dict = None, headers: dict = None) -> dict:
    resp = await client.post("/graphql", json={"query": query, "variables": variables or {}}, headers=headers or {})
    assert resp.status_code == 200
    return resp.json()


def error_code(result: dict) -> str:
    return result["errors"][0]["extensions"]["code"]


class TestQuery:

    async def test_veranstalter(self, client, sample_veranstalter):
        acme = sample_veranstalter[0]

        result = await graphql(client, VERANSTALTER_QUERY, {"id": str(acme.id)})

        assert "errors" not in result
        assert result["data"]["veranstalter"] == {
            "id": str(acme.id),
            "version": 0,
            "name": "ACME GmbH",
            "art": "PRAESENZ",
            "kategorien": ["Musik", "Kunst"],
            "standort": {"ort": "Karlsruhe", "plz": "76133"},
            "dokumente": [{"titel": "Programm"}],
            "teilnehmer": [{"nachname": "Mustermann"}],
        }

    @pytest.mark.parametrize("id", ["999", "abc"])
    async def test_veranstalter_not_found(self, client, sample_veranstalter, id):
        result = await graphql(client, VERANSTALTER_QUERY, {"id": id})

        assert result["data"] is None
        assert error_code(result) == "not_found"
        assert result["errors"][0]["extensions"]["status"] == 404

    async def test_veranstalters_without_suchparameter(self, client, sample_veranstalter):
        result = await graphql(client, SUCHE_QUERY)

        assert [v["name"] for v in result["data"]["veranstalters"]] == [
            "ACME GmbH", "EventPro Karlsruhe", "Kulturbuero Berlin"
        ]

    async def test_veranstalters_with_suchparameter(self, client, sample_veranstalter):
        result = await graphql(client, SUCHE_QUERY, {"suchparameter": {"aktiv": False, "art": "ONLINE"}})

        assert result["data"]["veranstalters"] == [
            {"name": "Kulturbuero Berlin", "aktiv": False, "standort": {"ort": "Berlin"}}
        ]

    async def test_veranstalters_no_match(self, client, sample_veranstalter):
        result = await graphql(client, SUCHE_QUERY, {"suchparameter": {"name": "gibt es nicht"}})

        assert error_code(result) == "not_found"


class TestMutation:

    async def test_create(self, client, user_headers, mailer):
        input = {
            "name": "Neu GmbH",
            "email": "info@neu.de",
            "art": "HYBRID",
            "kategorien": ["Musik"],
            "standort": {"ort": "Stuttgart", "plz": "70173"},
            "teilnehmer": [{"vorname": "Erika", "nachname": "Musterfrau", "email": "erika@example.com"}],
        }

        result = await graphql(client, CREATE_MUTATION, {"input": input}, user_headers)

        assert "errors" not in result
        id = result["data"]["create"]["id"]
        assert mailer.sent[0][0] == f"Neuer Veranstalter {id}"
        created = await graphql(client, VERANSTALTER_QUERY, {"id": str(id)})
        assert created["data"]["veranstalter"]["standort"] == {"ort": "Stuttgart", "plz": "70173"}
        assert created["data"]["veranstalter"]["teilnehmer"] == [{"nachname": "Musterfrau"}]

    async def test_create_invalid(self, client, admin_headers):
        input = {"name": "Neu GmbH", "bewertung": 9, "standort": {"ort": "Stuttgart"}}

        result = await graphql(client, CREATE_MUTATION, {"input": input}, admin_headers)

        assert error_code(result) == "validation_failed"
        assert result["errors"][0]["extensions"]["fields"][0].startswith("bewertung:")

    async def test_create_without_token(self, client):
        input = {"name": "Neu GmbH", "standort": {"ort": "Stuttgart"}}

        result = await graphql(client, CREATE_MUTATION, {"input": input})

        assert error_code(result) == "unauthorized"

    async def test_update(self, client, sample_veranstalter, admin_headers):
        id = str(sample_veranstalter[0].id)

        result = await graphql(
            client, UPDATE_MUTATION,
            {"input": {"id": id, "version": 0, "name": "ACME AG", "standort": {"plz": "76131"}}},
            admin_headers,
        )

        assert result["data"]["update"] == {"version": 1}
        updated = (await graphql(client, VERANSTALTER_QUERY, {"id": id}))["data"]["veranstalter"]
        assert updated["name"] == "ACME AG"
        assert updated["standort"] == {"ort": "Karlsruhe", "plz": "76131"}

    async def test_update_outdated_version(self, client, sample_veranstalter, admin_headers):
        input = {"id": str(sample_veranstalter[0].id), "version": 0, "bewertung": 3}
        await graphql(client, UPDATE_MUTATION, {"input": input}, admin_headers)

        result = await graphql(client, UPDATE_MUTATION, {"input": input}, admin_headers)

        assert error_code(result) == "version_outdated"
        assert result["errors"][0]["extensions"]["status"] == 412

    async def test_update_missing_id(self, client, sample_veranstalter, admin_headers):
        input = {"id": "999", "version": 0, "name": "X"}

        result = await graphql(client, UPDATE_MUTATION, {"input": input}, admin_headers)

        assert error_code(result) == "not_found"

    async def test_delete(self, client, sample_veranstalter, admin_headers):
        id = str(sample_veranstalter[0].id)

        result = await graphql(client, DELETE_MUTATION, {"id": id}, admin_headers)

        assert result["data"]["delete"] == {"success": True}
        assert error_code(await graphql(client, VERANSTALTER_QUERY, {"id": id})) == "not_found"

    async def test_delete_requires_admin(self, client, sample_veranstalter, user_headers):
        result = await graphql(client, DELETE_MUTATION, {"id": str(sample_veranstalter[0].id)}, user_headers)

        assert error_code(result) == "forbidden"
