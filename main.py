import logging
import sys

from config import load_config
from app.context import LoadTestContext
from domain.errors import ConfigError
from infra.clock import SystemClock
from infra.control_api import create_app
from infra.file_reader import PlainFileReader
from infra.sinks import PrintSink

logger = logging.getLogger("nfsload")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        cfg = load_config()
    except ConfigError as e:
        logger.critical("%s", e)
        raise SystemExit(1)

    logging.getLogger().setLevel(cfg.log_level)
    logger.info("NFS share set to %s, target file %s", cfg.nfs_dir, cfg.target_path)

    sinks = [PrintSink()] if cfg.report_windows else []

    # ---- pipeline core ----
    ctx = LoadTestContext.build(
        cfg,
        clock=SystemClock(),
        reader=PlainFileReader(),
        sinks=sinks,
    )
    ctx.start()

    app = create_app(ctx)
    try:
        app.run(host=cfg.host, port=cfg.port, threaded=True)
    finally:
        ctx.shutdown()


if __name__ == "__main__":
    sys.exit(main())
