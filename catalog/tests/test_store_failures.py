import logging

import pytest

from catalog.models import BookInstance


async def drop_bookinstances_table(test_engine):
    async with test_engine.begin() as conn:
        await conn.run_sync(BookInstance.__table__.drop)


def logged_store_error(caplog):
    return any(
        record.name == "catalog.services" and record.levelno == logging.ERROR
        and "DataBase error" in record.getMessage()
        for record in caplog.records
    )


@pytest.mark.anyio
async def test_list_store_failure(client, test_engine, caplog):
    await drop_bookinstances_table(test_engine)
    with caplog.at_level(logging.ERROR, logger="catalog.services"):
        response = await client.get(f"{client.base_url}/catalog/bookinstances")
    assert response.status_code == 500
    assert "An internal error occured" in response.text
    assert logged_store_error(caplog)


@pytest.mark.anyio
async def test_create_post_store_failure(client, test_engine, mock_book, caplog):
    await drop_bookinstances_table(test_engine)
    form_data = {"book": str(mock_book.id), "imprint": "Penguin", "status": "Available"}
    with caplog.at_level(logging.ERROR, logger="catalog.services"):
        response = await client.post(
            f"{client.base_url}/catalog/bookinstance/create", data=form_data
        )
    assert response.status_code == 500
    assert "An internal error occured" in response.text
    assert logged_store_error(caplog)


@pytest.mark.anyio
async def test_update_get_store_failure(client, test_engine, mock_book, caplog):
    await drop_bookinstances_table(test_engine)
    with caplog.at_level(logging.ERROR, logger="catalog.services"):
        response = await client.get(
            f"{client.base_url}/catalog/bookinstance/CP-XX-00000000/update"
        )
    assert response.status_code == 500
    assert "An internal error occured" in response.text
    assert logged_store_error(caplog)
