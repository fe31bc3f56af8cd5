"""
Unit tests for RadiologyServicesWorkflow.
"""

import pytest

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.radiology.application.workflows import RadiologyServicesWorkflow
from cura.domains.radiology.domain.entities import RadiologyServiceType
from cura.domains.shared.domain.errors import InvalidMutationError


@pytest.fixture
def services() -> list[dict]:
    return [
        {"service_id": 8, "name": "ultrasound Abdomen", "price": 900},
        {"service_id": 7, "name": "Chest X-Ray", "price": "450"},
        {"service_id": 9, "name": "CT Head", "price": None},
    ]


@pytest.fixture
def template_row() -> dict:
    return {
        "template_id": 21,
        "service_id": 7,
        "template_name": "Chest X-Ray",
        "template_structure": {"title": "Chest X-Ray", "content": "FINDINGS:\nClear", "sections": ["FINDINGS:"]},
    }


@pytest.fixture
def workflow(mock_api, services) -> RadiologyServicesWorkflow:
    mock_api.get_radiology_services.return_value = services
    mock_api.get_radiology_templates.return_value = []
    return RadiologyServicesWorkflow(mock_api)


@pytest.fixture
def xray() -> RadiologyServiceType:
    return RadiologyServiceType(service_id="7", name="Chest X-Ray", price=450)


class TestCatalog:
    """Loading and searching services."""

    @pytest.mark.asyncio
    async def test_sorted_by_name_case_insensitive(self, workflow) -> None:
        await workflow.load()

        assert [s.name for s in workflow.state.filtered] == ["Chest X-Ray", "CT Head", "ultrasound Abdomen"]

    @pytest.mark.asyncio
    async def test_load_failure(self, workflow, mock_api) -> None:
        mock_api.get_radiology_services.side_effect = HospitalAPIError("TIMEOUT", "slow")

        assert await workflow.load() == []
        assert workflow.error == "Failed to load radiology services."

    @pytest.mark.asyncio
    async def test_search(self, workflow) -> None:
        await workflow.load()

        workflow.set_search("ct")

        assert [s.name for s in workflow.state.filtered] == ["CT Head"]


class TestServiceMutations:
    """Adding, updating and deleting services."""

    @pytest.mark.asyncio
    async def test_add_service_reloads(self, workflow, mock_api) -> None:
        await workflow.add_service("  MRI Brain ", "2500")

        mock_api.add_radiology_service.assert_awaited_once_with("MRI Brain", 2500.0)
        mock_api.get_radiology_services.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, workflow, mock_api, xray) -> None:
        with pytest.raises(InvalidMutationError) as exc_info:
            await workflow.add_service("   ")
        assert exc_info.value.message == "Please fill in the service name."

        with pytest.raises(InvalidMutationError):
            await workflow.update_service(xray, "")

        mock_api.add_radiology_service.assert_not_called()
        mock_api.update_radiology_service.assert_not_called()

    @pytest.mark.asyncio
    async def test_unparseable_price_sent_as_none(self, workflow, mock_api, xray) -> None:
        await workflow.update_service(xray, "Chest X-Ray PA", "n/a")

        mock_api.update_radiology_service.assert_awaited_once_with("7", "Chest X-Ray PA", None)

    @pytest.mark.asyncio
    async def test_delete_removes_templates_first(self, workflow, mock_api, xray, template_row) -> None:
        mock_api.get_radiology_templates.return_value = [template_row, {**template_row, "template_id": 22}]
        await workflow.open_template(xray)

        await workflow.delete_service(xray)

        deleted = sorted(call.args for call in mock_api.delete_radiology_template.await_args_list)
        assert deleted == [("7", "21"), ("7", "22")]
        mock_api.delete_radiology_service.assert_awaited_once_with("7")
        assert workflow.selected is None


class TestTemplates:
    """The single template of a service."""

    @pytest.mark.asyncio
    async def test_open_template_without_one(self, workflow, xray) -> None:
        assert await workflow.open_template(xray) == ""
        assert workflow.selected is xray

    @pytest.mark.asyncio
    async def test_open_template_failure_is_empty(self, workflow, mock_api, xray) -> None:
        mock_api.get_radiology_templates.side_effect = HospitalAPIError("SERVER_ERROR", "down", 500)

        assert await workflow.open_template(xray) == ""
        assert workflow.templates == []

    @pytest.mark.asyncio
    async def test_save_creates_template(self, workflow, mock_api, xray, template_row) -> None:
        mock_api.add_radiology_template.return_value = template_row
        await workflow.open_template(xray)

        saved = await workflow.save_template("  FINDINGS:\nClear  ")

        mock_api.add_radiology_template.assert_awaited_once_with(
            "7",
            "Chest X-Ray",
            {"title": "Chest X-Ray", "content": "FINDINGS:\nClear", "sections": ["FINDINGS:"]},
        )
        mock_api.update_radiology_template.assert_not_called()
        assert saved.template_id == "21"
        assert workflow.templates == [saved]

    @pytest.mark.asyncio
    async def test_save_updates_existing_template(self, workflow, mock_api, xray, template_row) -> None:
        mock_api.get_radiology_templates.return_value = [template_row]
        mock_api.update_radiology_template.return_value = template_row
        await workflow.open_template(xray)

        await workflow.save_template("IMPRESSION:\nNormal")

        args = mock_api.update_radiology_template.await_args.args
        assert args[:3] == ("7", "21", "Chest X-Ray")
        assert args[3]["sections"] == ["IMPRESSION:"]
        mock_api.add_radiology_template.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_template_rejected(self, workflow, mock_api, xray) -> None:
        await workflow.open_template(xray)

        with pytest.raises(InvalidMutationError) as exc_info:
            await workflow.save_template("   ")

        assert exc_info.value.message == "Please fill in the template content."
        mock_api.add_radiology_template.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_without_selection(self, workflow) -> None:
        with pytest.raises(InvalidMutationError):
            await workflow.save_template("FINDINGS:")

    @pytest.mark.asyncio
    async def test_delete_template(self, workflow, mock_api, xray, template_row) -> None:
        mock_api.get_radiology_templates.return_value = [template_row]
        await workflow.open_template(xray)

        await workflow.delete_template(workflow.templates[0])

        mock_api.delete_radiology_template.assert_awaited_once_with("7", "21")
        assert workflow.templates == []
