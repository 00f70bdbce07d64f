from unittest.mock import MagicMock

import pytest

from services.applets_service import (
    AppletNotFoundError,
    AppletsService,
    NotFoundError,
    ServiceNotFoundError,
)
from tests.factories import make_applet, make_dropbox_service, make_service


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def applets_service(mock_db):
    return AppletsService(db=mock_db)


def _get_chain(db: MagicMock) -> MagicMock:
    return db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute


class TestAppletsService:
    async def test_list_applets_embeds_services(self, applets_service, mock_db):
        mock_db.table.return_value.select.return_value.order.return_value.execute.return_value = (
            MagicMock(data=[make_applet(), make_applet(id=2, name="Second")])
        )
        results = await applets_service.list_applets()
        assert [a.id for a in results] == [1, 2]
        assert results[0].trigger_service.name == "Instagram"
        assert results[0].action_service.slug == "dropbox"
        select_arg = mock_db.table.return_value.select.call_args[0][0]
        assert "trigger_service:services!trigger_service_id(*)" in select_arg
        assert "action_service:services!action_service_id(*)" in select_arg

    async def test_list_applets_filters_enabled(self, applets_service, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value
        chain.order.return_value.execute.return_value = MagicMock(
            data=[make_applet(enabled=False)]
        )
        results = await applets_service.list_applets(enabled=False)
        assert results[0].enabled is False
        mock_db.table.return_value.select.return_value.eq.assert_called_once_with("enabled", False)

    async def test_get_returns_applet(self, applets_service, mock_db):
        _get_chain(mock_db).return_value = MagicMock(data=[make_applet(id=5)])
        applet = await applets_service.get(5)
        assert applet.id == 5
        mock_db.table.return_value.select.return_value.eq.assert_called_once_with("id", 5)

    async def test_get_missing_applet_raises(self, applets_service, mock_db):
        _get_chain(mock_db).return_value = MagicMock(data=[])
        with pytest.raises(AppletNotFoundError) as excinfo:
            await applets_service.get(99)
        assert excinfo.value.applet_id == 99
        assert isinstance(excinfo.value, NotFoundError)
        assert isinstance(excinfo.value, ValueError)

    async def test_toggle_flips_enabled(self, applets_service, mock_db):
        _get_chain(mock_db).return_value = MagicMock(data=[make_applet(enabled=True)])
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value = (
            MagicMock(data=[{"id": 1, "enabled": False, "updated_at": "2026-02-01T00:00:00"}])
        )
        applet = await applets_service.toggle(1)
        assert applet.enabled is False
        assert applet.updated_at.month == 2
        mock_db.table.return_value.update.assert_called_once_with({"enabled": False})

    async def test_toggle_missing_applet_raises(self, applets_service, mock_db):
        _get_chain(mock_db).return_value = MagicMock(data=[])
        with pytest.raises(AppletNotFoundError):
            await applets_service.toggle(42)
        mock_db.table.return_value.update.assert_not_called()

    async def test_list_services(self, applets_service, mock_db):
        mock_db.table.return_value.select.return_value.order.return_value.execute.return_value = (
            MagicMock(data=[make_service(), make_dropbox_service()])
        )
        results = await applets_service.list_services()
        assert [s.slug for s in results] == ["instagram", "dropbox"]
        mock_db.table.assert_called_once_with("services")

    async def test_get_missing_service_raises(self, applets_service, mock_db):
        _get_chain(mock_db).return_value = MagicMock(data=[])
        with pytest.raises(ServiceNotFoundError, match="Service not found"):
            await applets_service.get_service(7)
