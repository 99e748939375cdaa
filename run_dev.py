import logging

from neattabs.config.settings import settings
from neattabs.infrastructure.bootstrap import build_default_session
from neattabs.infrastructure.inbound import bridge_server


def main():
    print("Initializing DEV environment...")
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    # 1. Grouping runtime (host bridge client + preference store)
    session = build_default_session(settings)

    # 2. Inbound bridge
    bridge_server.setup_dependencies(
        grouping_session=session,
        token=settings.BRIDGE_SECRET_TOKEN,
        wait_timeout=settings.EVENT_WAIT_TIMEOUT_SECONDS,
    )

    print(f"Bridge listening on {settings.BRIDGE_HOST}:{settings.BRIDGE_PORT}")
    print(f"Host bridge: {settings.HOST_BRIDGE_URL}")
    try:
        bridge_server.run_server(host=settings.BRIDGE_HOST, port=settings.BRIDGE_PORT)
    finally:
        session.close()


if __name__ == "__main__":
    main()
