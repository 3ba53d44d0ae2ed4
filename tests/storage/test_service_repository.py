# tests/storage/test_service_repository.py

import pytest

from costgraph.core.exceptions import QueryError
from costgraph.models.graph import ALL
from costgraph.storage.service_repository import ServiceRepository


@pytest.mark.asyncio
async def test_live_services_are_decoded(fake_store):
    fake_store.execute_query.return_value = {"services": [{"uid": "0x9", "name": "frontend"}]}

    services = await ServiceRepository(fake_store).retrieve_all_live_services()

    assert [s.name for s in services] == ["frontend"]
    assert services[0].is_live


@pytest.mark.asyncio
async def test_live_services_failure_yields_empty_list(fake_store):
    fake_store.execute_query.side_effect = QueryError("bad")

    assert await ServiceRepository(fake_store).retrieve_all_live_services() == []


@pytest.mark.asyncio
async def test_service_hierarchy_lists_selected_pods(fake_store):
    fake_store.execute_query.return_value = {
        "parent": [
            {
                "name": "frontend",
                "type": "service",
                "children": [{"name": "web-1", "type": "pod"}, {"name": "web-2", "type": "pod"}],
            }
        ]
    }

    wrapper = await ServiceRepository(fake_store).retrieve_service_hierarchy("frontend")

    assert [c.name for c in wrapper.data.children] == ["web-1", "web-2"]
    query = fake_store.execute_query.await_args.args[0]
    assert query.variables == {"$name": "frontend"}


@pytest.mark.asyncio
@pytest.mark.parametrize("name", [ALL, ""])
async def test_missing_service_name_skips_the_store(fake_store, name):
    wrapper = await ServiceRepository(fake_store).retrieve_service_hierarchy(name)

    assert wrapper.is_empty
    fake_store.execute_query.assert_not_called()
