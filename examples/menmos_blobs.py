import asyncio
import io
import os

from dotenv import load_dotenv

from menmos import AsyncMenmosClient, BlobMeta, MenmosClient, Range

load_dotenv()


def sync_roundtrip(client: MenmosClient) -> str:
    meta = BlobMeta(
        name="hello.txt",
        metadata={"source": "examples"},
        tags=["examples", "greeting"],
        size=len(b"hello from python"),
    )

    # 1) Create a blob from bytes
    blob_id = client.create_blob(b"hello from python", meta)
    print("created:", blob_id)

    # 2) Read it back whole, then a slice of it
    with client.get_body(blob_id) as reader:
        print("body:", reader.read())
    print("range 6-9:", client.get_body(blob_id, Range(6, 9)).read())

    # 3) Replace the body with a file-like object
    payload = b"replaced " * 4096
    client.update_blob(blob_id, io.BytesIO(payload), meta.model_copy(update={"size": len(payload)}))

    # 4) Retag without touching the body
    client.update_meta(blob_id, meta.model_copy(update={"tags": ["examples", "replaced"]}))
    print("metadata:", client.get_metadata(blob_id))
    return blob_id


async def async_listing(host: str, username: str, password: str, blob_id: str) -> None:
    async with await AsyncMenmosClient.connect(host, username, password) as client:
        print("health:", await client.health())
        for node in await client.list_storage_nodes():
            print(" - node", node.id, node.available_space, "bytes free")

        reader = await client.get_body(blob_id, Range(0, 7))
        async for chunk in reader:
            print("async chunk:", chunk)

        await client.delete(blob_id)
        print("deleted:", blob_id)


def main() -> None:
    host = os.getenv("MENMOS_HOST")
    assert host, "Set MENMOS_HOST"
    username = os.getenv("MENMOS_USERNAME", "admin")
    password = os.getenv("MENMOS_PASSWORD")
    assert password, "Set MENMOS_PASSWORD"

    with MenmosClient.connect(host, username, password) as client:
        blob_id = sync_roundtrip(client)

    asyncio.run(async_listing(host, username, password, blob_id))


if __name__ == "__main__":
    main()
