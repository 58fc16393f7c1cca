import logging
from pathlib import Path

import pytest
from loguru import logger

from helper_functions import make_channel, make_document, make_spectrum, to_axd_bytes
from settings import Settings


class PropagateHandler(logging.Handler):
    """Handler that propagates loguru records to standard logging."""

    def emit(self, record: logging.LogRecord) -> None:
        logging.getLogger(record.name).handle(record)


@pytest.fixture
def caplog(caplog):
    """Fixture to enable caplog to capture loguru logs."""
    handler_id = logger.add(PropagateHandler(), format="{message}")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def settings() -> Settings:
    return Settings()  # type: ignore


@pytest.fixture
def axd_file(tmp_path: Path) -> Path:
    """An .axd file with a straight channel, an oblique channel and two spectra."""
    document = make_document(
        channels=[
            make_channel(label="Height", resolution=(4, 3), size=(8.0, 6.0)),
            make_channel(
                label="IR Amplitude",
                data_channel="ir",
                resolution=(4, 4),
                scan_angle="30 deg",
            ),
        ],
        spectra=[
            make_spectrum([1.0, 2.0, 3.0, 4.0, 5.0], label="Spectrum 1"),
            make_spectrum([6.0, 7.0, 8.0], label="Spectrum 2", location=(1.0, 2.0)),
        ],
    )
    path = tmp_path / "scan.axd"
    path.write_bytes(to_axd_bytes(document))
    return path
