"""
StaffRoster Backend: Employee API Tests
=========================================

What:  End-to-end tests of the /funcionario endpoints.
How:   HTTPX AsyncClient → FastAPI app → EmployeeService → SQLite record store.
       Failure injection uses the mock_client fixture (mock RecordStore).
"""

import logging
import uuid

import pytest

from staffroster.exceptions import StoreError

BASE = "/funcionario"


async def _create_and_fetch_id(client, payload):
    response = await client.post(BASE, json=payload)
    assert response.status_code == 201
    employees = (await client.get(BASE)).json()
    # Each test starts from an empty store, so the new record is the only one
    assert len(employees) == 1
    return employees[0]["id"]


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_returns_201_and_is_listed(self, test_client, sample_employee_data):
        response = await test_client.post(BASE, json=sample_employee_data)

        assert response.status_code == 201
        assert response.json() == {"message": "Employee created successfully"}

        employees = (await test_client.get(BASE)).json()
        assert len(employees) == 1
        assert employees[0]["id"]
        assert employees[0]["name"] == "Ana"
        assert employees[0]["role"] == "Engineer"
        assert employees[0]["salary"] == 5000
        assert employees[0]["terminated"] is False

    @pytest.mark.asyncio
    async def test_trailing_slash_is_accepted(self, test_client, sample_employee_data):
        response = await test_client.post(f"{BASE}/", json=sample_employee_data)

        assert response.status_code == 201
        assert len((await test_client.get(f"{BASE}/")).json()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"role": ""},
            {"salary": 0},
            {"name": None},
        ],
    )
    async def test_incomplete_payload_returns_422(
        self, test_client, sample_employee_data, overrides
    ):
        response = await test_client.post(BASE, json={**sample_employee_data, **overrides})

        assert response.status_code == 422
        assert response.json()["error"] == "Name, role, salary and terminated status are required"
        assert (await test_client.get(BASE)).json() == []

    @pytest.mark.asyncio
    async def test_terminated_absent_returns_422(self, test_client, sample_employee_data):
        del sample_employee_data["terminated"]

        response = await test_client.post(BASE, json=sample_employee_data)

        assert response.status_code == 422
        assert (await test_client.get(BASE)).json() == []

    @pytest.mark.asyncio
    async def test_terminated_false_is_accepted(self, test_client, sample_employee_data):
        sample_employee_data["terminated"] = False

        response = await test_client.post(BASE, json=sample_employee_data)

        assert response.status_code == 201

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["role", "salary"])
    async def test_omitted_key_returns_422(
        self, test_client, sample_employee_data, missing
    ):
        del sample_employee_data[missing]

        response = await test_client.post(BASE, json=sample_employee_data)

        assert response.status_code == 422
        assert response.json()["error"] == "Name, role, salary and terminated status are required"
        assert (await test_client.get(BASE)).json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity"])
    async def test_non_finite_salary_returns_422(self, test_client, amount):
        body = '{"name": "Ana", "role": "Engineer", "salary": %s, "terminated": false}' % amount

        response = await test_client.post(
            BASE, content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        assert "salary" in response.json()["error"]
        assert (await test_client.get(BASE)).json() == []

    @pytest.mark.asyncio
    async def test_uncoercible_salary_returns_422_error_body(self, test_client, sample_employee_data):
        sample_employee_data["salary"] = "a lot"

        response = await test_client.post(BASE, json=sample_employee_data)

        assert response.status_code == 422
        assert "salary" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_store_failure_returns_500_with_message(
        self, mock_client, mock_store, sample_employee_data
    ):
        mock_store.create.side_effect = StoreError(message="connection refused")

        response = await mock_client.post(BASE, json=sample_employee_data)

        assert response.status_code == 500
        assert response.json()["error"] == "connection refused"


class TestReadUpdateDelete:

    @pytest.mark.asyncio
    async def test_get_by_id(self, test_client, sample_employee_data):
        employee_id = await _create_and_fetch_id(test_client, sample_employee_data)

        response = await test_client.get(f"{BASE}/{employee_id}")

        assert response.status_code == 200
        assert response.json()["id"] == employee_id

    @pytest.mark.asyncio
    async def test_unknown_id_returns_404_everywhere(self, test_client, sample_employee_data):
        unknown = str(uuid.uuid4())

        get = await test_client.get(f"{BASE}/{unknown}")
        put = await test_client.put(f"{BASE}/{unknown}", json=sample_employee_data)
        delete = await test_client.delete(f"{BASE}/{unknown}")

        for response in (get, put, delete):
            assert response.status_code == 404
            assert response.json()["error"] == "Employee not found"

    @pytest.mark.asyncio
    async def test_malformed_id_returns_500(self, test_client, sample_employee_data):
        get = await test_client.get(f"{BASE}/not-an-id")
        put = await test_client.put(f"{BASE}/not-an-id", json=sample_employee_data)
        delete = await test_client.delete(f"{BASE}/not-an-id")

        for response in (get, put, delete):
            assert response.status_code == 500
            assert "Cast to UUID failed" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_update_then_get_reflects_changes(self, test_client, sample_employee_data):
        employee_id = await _create_and_fetch_id(test_client, sample_employee_data)

        response = await test_client.put(
            f"{BASE}/{employee_id}",
            json={"name": "Ana", "role": "Lead", "salary": 6000, "terminated": True},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "Lead"
        fetched = (await test_client.get(f"{BASE}/{employee_id}")).json()
        assert fetched["id"] == employee_id
        assert fetched["salary"] == 6000
        assert fetched["terminated"] is True

    @pytest.mark.asyncio
    async def test_update_is_not_validated(self, test_client, sample_employee_data):
        """An empty body is written as-is: every business field becomes null."""
        employee_id = await _create_and_fetch_id(test_client, sample_employee_data)

        response = await test_client.put(f"{BASE}/{employee_id}", json={})

        assert response.status_code == 200
        assert response.json() == {
            "id": employee_id,
            "name": None,
            "role": None,
            "salary": None,
            "terminated": None,
        }

    @pytest.mark.asyncio
    async def test_update_without_body_nulls_every_field(
        self, test_client, sample_employee_data
    ):
        employee_id = await _create_and_fetch_id(test_client, sample_employee_data)

        response = await test_client.put(f"{BASE}/{employee_id}")

        assert response.status_code == 200
        assert response.json() == {
            "id": employee_id,
            "name": None,
            "role": None,
            "salary": None,
            "terminated": None,
        }

    @pytest.mark.asyncio
    async def test_update_rejects_non_finite_salary(self, test_client, sample_employee_data):
        employee_id = await _create_and_fetch_id(test_client, sample_employee_data)

        response = await test_client.put(
            f"{BASE}/{employee_id}",
            content='{"salary": NaN}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert (await test_client.get(f"{BASE}/{employee_id}")).json()["salary"] == 5000

    @pytest.mark.asyncio
    async def test_delete_then_get_returns_404(self, test_client, sample_employee_data):
        employee_id = await _create_and_fetch_id(test_client, sample_employee_data)

        response = await test_client.delete(f"{BASE}/{employee_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Employee deleted successfully"}
        assert (await test_client.get(f"{BASE}/{employee_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_list_store_failure_returns_500(self, mock_client, mock_store):
        mock_store.find_all.side_effect = RuntimeError("server selection timed out")

        response = await mock_client.get(BASE)

        assert response.status_code == 500
        assert response.json()["error"] == "server selection timed out"


class TestScenarios:

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, test_client):
        """Create → list → get → update → delete → get."""
        ana = {"name": "Ana", "role": "Engineer", "salary": 5000, "terminated": False}

        assert (await test_client.post(BASE, json=ana)).status_code == 201

        employees = (await test_client.get(BASE)).json()
        assert len(employees) == 1
        employee_id = employees[0]["id"]
        assert {k: employees[0][k] for k in ana} == ana

        fetched = await test_client.get(f"{BASE}/{employee_id}")
        assert fetched.status_code == 200
        assert {k: fetched.json()[k] for k in ana} == ana

        updated = await test_client.put(
            f"{BASE}/{employee_id}",
            json={"name": "Ana", "role": "Lead", "salary": 6000, "terminated": False},
        )
        assert updated.status_code == 200
        assert updated.json()["role"] == "Lead"

        assert (await test_client.delete(f"{BASE}/{employee_id}")).status_code == 200
        assert (await test_client.get(f"{BASE}/{employee_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_empty_name_creates_nothing(self, test_client):
        response = await test_client.post(
            BASE, json={"name": "", "role": "Engineer", "salary": 5000, "terminated": False}
        )

        assert response.status_code == 422
        assert (await test_client.get(BASE)).json() == []


class TestAmbient:

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get(BASE, headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get(
            f"{BASE}/{uuid.uuid4()}", headers={"X-Request-ID": "trace-1"}
        )

        assert response.json()["request_id"] == "trace-1"

    @pytest.mark.asyncio
    async def test_health_reports_connected_store(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_store(self, mock_client, mock_store):
        mock_store.ping.return_value = False

        response = await mock_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_module_app_serves_collection_route(self):
        from staffroster.main import app

        assert "/funcionario" in {route.path for route in app.routes}

    @pytest.mark.asyncio
    async def test_access_log_names_route_template_and_employee(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="staffroster.access")
        unknown = str(uuid.uuid4())

        await test_client.get(f"{BASE}/{unknown}")

        records = [r for r in caplog.records if r.name == "staffroster.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "GET /funcionario/{employee_id}" in records[0].getMessage()
        assert f"employee={unknown}" in records[0].getMessage()
        assert records[0].status == 404
