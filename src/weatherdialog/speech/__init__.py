"""Speech engines.

Everything logged here lands under the ``weatherdialog.speech`` logger.
"""

import logging
import shutil

from weatherdialog.core.scheduler import Scheduler
from weatherdialog.devices.protocols import SpeechEngine
from weatherdialog.models import SpeechConfig

from .espeak import EspeakSpeechEngine
from .simulated import SimulatedSpeechEngine

logger = logging.getLogger(__name__)


def create_speech_engine(config: SpeechConfig, scheduler: Scheduler) -> SpeechEngine:
    """
    Build the engine selected in the configuration.

    Args:
        config: Speech settings
        scheduler: Used by the simulated engine to time utterances
    """
    if config.engine == "espeak":
        if shutil.which(config.espeak_command) is None:
            logger.warning(
                f"'{config.espeak_command}' not found on PATH; utterances will be skipped. "
                "Set speech.engine to \"simulated\" to silence this warning."
            )
        return EspeakSpeechEngine(config.espeak_command, config.voice)
    return SimulatedSpeechEngine(scheduler, config.simulated_words_per_minute)


__all__ = ["EspeakSpeechEngine", "SimulatedSpeechEngine", "create_speech_engine"]
