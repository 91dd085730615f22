"""
End-to-end scenarios through the grid view
"""

import httpx
import pytest

from spreadsheet_grid.config.settings import Settings
from spreadsheet_grid.grid_view import GridView
from spreadsheet_grid.handlers.input_device import LocalInputDevice, PointerEvent, PointerEventType
from spreadsheet_grid.main import create_app
from spreadsheet_grid.models.cell_model import CellEdit
from spreadsheet_grid.models.session_model import EditMode
from spreadsheet_grid.services.errors import TransportFailure
from spreadsheet_grid.services.sync_client import SyncClient

from conftest import ScriptedClient, entry


class TestEditingScenario:

    @pytest.mark.asyncio
    async def test_literal_to_formula_edit_round_trip(self, settings):
        client = ScriptedClient(snapshot=[entry(0, 0, "5", "")])

        async with GridView(settings, client=client) as view:
            assert client.pull_count == 1
            assert view.display_text(0, 0) == "5"

            session = view.cell_double_clicked(0, 0)
            assert session.draft_text == "5"
            assert session.mode == EditMode.LITERAL

            assert view.draft_changed("=").mode == EditMode.FORMULA
            view.draft_changed("=A1+1")
            assert view.display_text(0, 0) == "=A1+1"

            edit = view.key_pressed("Enter")

            assert edit == CellEdit(row=0, column=0, value="=A1+1", formula="=A1+1")
            assert not view.is_editing(0, 0)
            assert view.grid.read_cell(0, 0).value == "=A1+1"

        assert client.pushed == [edit]
        assert client.pull_count == 2
        assert client.closed

    @pytest.mark.asyncio
    async def test_blur_commits(self, settings):
        client = ScriptedClient()

        async with GridView(settings, client=client) as view:
            view.cell_double_clicked(2, 1)
            view.draft_changed("hello")
            view.editor_blurred()
            view.editor_blurred()

        assert client.pushed == [CellEdit(row=2, column=1, value="hello", formula="hello")]

    @pytest.mark.asyncio
    async def test_click_to_compose_formula(self, settings):
        focus_calls = []
        client = ScriptedClient()

        async with GridView(settings, client=client,
                            restore_focus=lambda: focus_calls.append(True)) as view:
            view.cell_double_clicked(0, 0)
            view.draft_changed("=")

            assert view.cell_clicked(1, 2) == "C2"
            view.draft_changed(view.display_text(0, 0) + "+")
            assert view.cell_clicked(0, 1) == "B1"

            assert view.display_text(0, 0) == "=C2+B1"
            assert focus_calls == [True, True]

            view.editor_blurred()

        assert client.pushed[0].formula == "=C2+B1"

    @pytest.mark.asyncio
    async def test_clicks_outside_formula_mode_do_nothing(self, settings):
        async with GridView(settings, client=ScriptedClient()) as view:
            assert view.cell_clicked(1, 2) is None

            view.cell_double_clicked(0, 0)
            view.draft_changed("text")
            assert view.cell_clicked(1, 2) is None
            assert view.display_text(0, 0) == "text"


class TestSwitchPolicy:

    @pytest.mark.asyncio
    async def test_discard_on_switch_by_default(self, settings):
        client = ScriptedClient()

        async with GridView(settings, client=client) as view:
            view.cell_double_clicked(0, 0)
            view.draft_changed("lost")
            view.cell_double_clicked(1, 1)

            assert view.is_editing(1, 1)

        assert client.pushed == []

    @pytest.mark.asyncio
    async def test_commit_on_switch_when_configured(self):
        settings = Settings(_env_file=None, EDIT_SWITCH_POLICY="commit")
        client = ScriptedClient()

        async with GridView(settings, client=client) as view:
            view.cell_double_clicked(0, 0)
            view.draft_changed("kept")
            view.cell_double_clicked(1, 1)

        assert client.pushed == [CellEdit(row=0, column=0, value="kept", formula="kept")]


class TestResizeScenario:

    @pytest.mark.asyncio
    async def test_handles_drive_resizing(self, settings):
        device = LocalInputDevice()

        async with GridView(settings, client=ScriptedClient(), device=device) as view:
            assert device.listener_count(PointerEventType.MOVE) == 1

            view.column_handle_pressed(1, PointerEvent(client_x=200, client_y=0))
            device.move(client_x=240)
            device.release(client_x=240)
            assert view.column_width(1) == 140

            view.row_handle_pressed(3, PointerEvent(client_x=0, client_y=100))
            device.move(client_y=10)
            device.release(client_y=10)
            assert view.row_height(3) == 20

            assert device.listener_count(PointerEventType.UP) == 1

        assert device.listener_count(PointerEventType.MOVE) == 0
        assert device.listener_count(PointerEventType.UP) == 0

    @pytest.mark.asyncio
    async def test_reload_keeps_sizes(self, settings):
        device = LocalInputDevice()
        client = ScriptedClient(snapshot=[entry(0, 0, "1")])

        async with GridView(settings, client=client, device=device) as view:
            view.column_handle_pressed(0, PointerEvent(client_x=0))
            device.move(client_x=50)
            device.release()

            view.cell_double_clicked(0, 0)
            view.editor_blurred()
            await view.synchronizer.drain()

            assert view.column_width(0) == 150


class TestViewLifecycle:

    @pytest.mark.asyncio
    async def test_failed_initial_load_leaves_empty_grid(self, settings):
        client = ScriptedClient(pull_error=TransportFailure("pull", "offline"))
        view = GridView(settings, client=client)

        assert await view.open() is False
        assert view.grid.non_empty_cells() == {}

        await view.close()

    def test_labels(self, settings):
        view = GridView(settings, client=ScriptedClient())

        assert view.column_labels[:3] == ["A", "B", "C"]
        assert view.column_labels[-1] == "Z"
        assert view.row_labels[0] == 1
        assert len(view.row_labels) == 30

    @pytest.mark.asyncio
    async def test_against_development_store(self, settings):
        app = create_app(settings)
        http_client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
        client = SyncClient(base_url="http://store.test", client=http_client)

        async with GridView(settings, client=client) as view:
            view.cell_double_clicked(4, 2)
            view.draft_changed("=A1*2")
            view.editor_blurred()
            await view.synchronizer.drain()

            assert view.grid.read_cell(4, 2).formula == "=A1*2"
            assert app.state.store.snapshot()[0].formulas == "=A1*2"

        await http_client.aclose()
