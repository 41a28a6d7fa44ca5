import unittest

import aiohttp

from fake_graph import DRIVE_ID, ROOT_ID, TOKEN, FakeGraph
from odrivefs.client import GraphDriveClient
from odrivefs.config import GRAPH_BASE_URL
from odrivefs.errors import AuthError, NetworkError, RemoteNotFound


class GraphClientTestCase(unittest.IsolatedAsyncioTestCase):
    page_size = 100

    async def asyncSetUp(self) -> None:
        self.graph = FakeGraph(page_size=self.page_size)
        self.docs = self.graph.add_folder("Docs", item_id="F1")
        self.a = self.graph.add_file("a.txt", b"hello", self.docs, item_id="I1")
        base_url = await self.graph.start()
        self.session = aiohttp.ClientSession()
        self.client = GraphDriveClient(TOKEN, session=self.session, base_url=base_url)

    async def asyncTearDown(self) -> None:
        await self.client.close()
        await self.session.close()
        await self.graph.close()


class TestGraphClientReads(GraphClientTestCase):
    async def test_list_drives(self) -> None:
        drives = await self.client.list_drives()
        self.assertEqual([d.id for d in drives], [DRIVE_ID])
        self.assertEqual(drives[0].owner.display_name, "Test User")

    async def test_get_item_by_path(self) -> None:
        item = await self.client.get_item(DRIVE_ID, "Docs/a.txt")
        self.assertEqual(item.id, "I1")
        self.assertTrue(item.is_file)
        self.assertEqual(item.parent_ref.relative_path, "Docs")

    async def test_get_item_for_root(self) -> None:
        item = await self.client.get_item(DRIVE_ID, "")
        self.assertEqual(item.id, ROOT_ID)
        self.assertTrue(item.is_root)

    async def test_not_found_carries_status_body_and_url(self) -> None:
        with self.assertRaises(RemoteNotFound) as ctx:
            await self.client.get_item(DRIVE_ID, "Docs/missing.txt")
        err = ctx.exception
        self.assertEqual(err.status_code, 404)
        self.assertIn("itemNotFound", err.body)
        self.assertIn("Docs/missing.txt", err.url)

    async def test_bearer_token_is_sent(self) -> None:
        other = GraphDriveClient("wrong", session=self.session, base_url=self.graph.base_url)
        with self.assertRaises(AuthError) as ctx:
            await other.get_item(DRIVE_ID, "Docs")
        self.assertEqual(ctx.exception.status_code, 401)

    async def test_children_by_id(self) -> None:
        children = await self.client.get_children(DRIVE_ID, "F1")
        self.assertEqual([c.name for c in children], ["a.txt"])

    async def test_download_follows_redirect(self) -> None:
        self.assertEqual(await self.client.download(DRIVE_ID, "Docs/a.txt"), b"hello")

    async def test_path_segments_are_encoded(self) -> None:
        self.graph.add_file("my notes.txt", b"x", self.docs)
        self.assertEqual(await self.client.download(DRIVE_ID, "Docs/my notes.txt"), b"x")


class TestGraphClientPaging(GraphClientTestCase):
    page_size = 2

    async def test_children_pages_are_concatenated_in_order(self) -> None:
        for name in ("b", "c", "d"):
            self.graph.add_file(name, b"", ROOT_ID)

        children = await self.client.get_root_children(DRIVE_ID)

        self.assertEqual([c.name for c in children], ["Docs", "b", "c", "d"])
        self.assertEqual(
            sum(1 for m, tail, _ in self.graph.requests if tail.endswith("root/children")), 2
        )

    async def test_delta_follows_next_links_and_keeps_cursor(self) -> None:
        self.graph.add_file("b.txt", b"", ROOT_ID)

        page = await self.client.delta(DRIVE_ID)

        self.assertEqual([i.name for i in page.items], ["root", "Docs", "b.txt", "a.txt"])
        self.assertIsNotNone(page.delta_link)
        self.assertIn("token=", page.delta_link)
        self.assertIsNotNone(page.server_time)
        self.assertGreaterEqual(self.graph.delta_calls(), 2)

    async def test_delta_from_cursor_returns_only_changes(self) -> None:
        first = await self.client.delta(DRIVE_ID)
        self.graph.remove("I1")

        second = await self.client.delta(DRIVE_ID, first.delta_link)

        self.assertEqual([i.id for i in second.items], ["I1"])
        self.assertTrue(second.items[0].is_deleted)
        self.assertNotEqual(second.delta_link, first.delta_link)


class TestGraphClientWrites(GraphClientTestCase):
    async def test_upload_creates_then_replaces(self) -> None:
        created = await self.client.upload(DRIVE_ID, "Docs/new.bin", b"\x00\x01")
        self.assertEqual(created.size, 2)

        replaced = await self.client.upload(
            DRIVE_ID, "Docs/new.bin", b"abc", mime_type="application/octet-stream"
        )
        self.assertEqual(replaced.id, created.id)
        self.assertEqual(await self.client.download(DRIVE_ID, "Docs/new.bin"), b"abc")

    async def test_delete_is_idempotent(self) -> None:
        await self.client.delete(DRIVE_ID, "Docs/a.txt")
        await self.client.delete(DRIVE_ID, "Docs/a.txt")

        with self.assertRaises(RemoteNotFound):
            await self.client.get_item(DRIVE_ID, "Docs/a.txt")

    async def test_create_folder_auto_renames_on_collision(self) -> None:
        first = await self.client.create_folder(DRIVE_ID, ROOT_ID, "Docs")
        self.assertEqual(first.name, "Docs 1")
        self.assertTrue(first.is_folder)

        sent = [body for m, tail, body in self.graph.requests if m == "POST"][-1]
        self.assertEqual(sent["@microsoft.graph.conflictBehavior"], "rename")

    async def test_move_keeps_id(self) -> None:
        other = self.graph.add_folder("Other", item_id="F2")

        moved = await self.client.move(DRIVE_ID, "I1", other, "b.txt")

        self.assertEqual(moved.id, "I1")
        self.assertEqual(moved.name, "b.txt")
        self.assertEqual(moved.parent_ref.id, "F2")
        self.assertEqual((await self.client.get_item(DRIVE_ID, "Other/b.txt")).id, "I1")

    async def test_copy_returns_monitor_url(self) -> None:
        monitor = await self.client.copy(DRIVE_ID, "I1", ROOT_ID, "copy.txt")

        self.assertIn("/monitor/", monitor)
        self.assertEqual(await self.client.download(DRIVE_ID, "copy.txt"), b"hello")


class TestGraphClientTransport(unittest.IsolatedAsyncioTestCase):
    async def test_connection_failure_is_network_error(self) -> None:
        async with GraphDriveClient(TOKEN, base_url="http://127.0.0.1:1/", timeout=5) as client:
            with self.assertRaises(NetworkError):
                await client.list_drives()

    async def test_close_leaves_injected_session_open(self) -> None:
        session = aiohttp.ClientSession()
        try:
            client = GraphDriveClient(TOKEN, session=session)
            await client.close()
            self.assertFalse(session.closed)
        finally:
            await session.close()

    def test_default_base_url_comes_from_config(self) -> None:
        client = GraphDriveClient(TOKEN)
        self.assertEqual(client._url("me/drives"), GRAPH_BASE_URL + "me/drives")
        self.assertFalse(hasattr(GraphDriveClient, "GRAPH_BASE_URL"))

    async def test_absolute_routes_bypass_base_url(self) -> None:
        client = GraphDriveClient(TOKEN, base_url="https://example.invalid/v1.0/")
        self.assertEqual(client._url("https://other/x"), "https://other/x")
        self.assertEqual(client._url("/me/drives"), "https://example.invalid/v1.0/me/drives")


if __name__ == "__main__":
    unittest.main()
