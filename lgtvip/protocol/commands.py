"""
IP control command vocabulary.

Argument values accepted by the TV for each command, taken from LG's IP
control documentation. Commands themselves are plain strings of the form
``<COMMAND> <ARG>``; see :class:`lgtvip.tv.LGTV`.
"""

from __future__ import annotations

from enum import Enum


class Command(str, Enum):
    """Command keywords understood by the TV."""

    APP_LAUNCH = "APP_LAUNCH"
    CURRENT_APP = "CURRENT_APP"
    CURRENT_VOL = "CURRENT_VOL"
    ENERGY_SAVING = "ENERGY_SAVING"
    GET_IPCONTROL_STATE = "GET_IPCONTROL_STATE"
    GET_MACADDRESS = "GET_MACADDRESS"
    INPUT_SELECT = "INPUT_SELECT"
    KEY_ACTION = "KEY_ACTION"
    MUTE_STATE = "MUTE_STATE"
    PICTURE_MODE = "PICTURE_MODE"
    POWER = "POWER"
    SCREEN_MUTE = "SCREEN_MUTE"
    VOLUME_CONTROL = "VOLUME_CONTROL"
    VOLUME_MUTE = "VOLUME_MUTE"

    def build(self, *args: object) -> str:
        """
        Render the command line.

        Example:
            >>> Command.POWER.build("off")
            'POWER off'
            >>> Command.INPUT_SELECT.build(Input.HDMI1)
            'INPUT_SELECT hdmi1'
        """
        parts = [self.value]
        parts.extend(str(arg.value) if isinstance(arg, Enum) else str(arg) for arg in args)
        return " ".join(parts)


class App(str, Enum):
    """
    Well-known application identifiers.

    The TV reports and launches apps by these ids. Apps not listed here are
    still accepted as raw strings.
    """

    AMAZON = "amazon"
    APPLE_TV = "com.apple.appletv"
    BROWSER = "com.webos.app.browser"
    DISNEY_PLUS = "com.disney.disneyplus-prod"
    HBO_MAX = "com.hbo.hbomax"
    HULU = "hulu"
    LIVE_TV = "com.webos.app.livetv"
    NETFLIX = "netflix"
    PLEX = "cdp-30"
    SPOTIFY = "spotify-beehive"
    YOUTUBE = "youtube.leanback.v4"

    @classmethod
    def lookup(cls, app_id: str) -> App | str:
        """Return the matching member, or ``app_id`` unchanged if unknown."""
        try:
            return cls(app_id)
        except ValueError:
            return app_id


class Input(str, Enum):
    """Input sources for ``INPUT_SELECT``."""

    DTV = "dtv"
    ATV = "atv"
    CADTV = "cadtv"
    CATV = "catv"
    AV1 = "av1"
    COMPONENT1 = "component1"
    HDMI1 = "hdmi1"
    HDMI2 = "hdmi2"
    HDMI3 = "hdmi3"
    HDMI4 = "hdmi4"


class Key(str, Enum):
    """Remote control keys for ``KEY_ACTION``."""

    ARROW_DOWN = "arrowdown"
    ARROW_LEFT = "arrowleft"
    ARROW_RIGHT = "arrowright"
    ARROW_UP = "arrowup"
    ASPECT_RATIO = "aspectratio"
    AUDIO_MODE = "audiomode"
    BACK = "returnback"
    BLUE_BUTTON = "bluebutton"
    CAPTION_SUBTITLE = "subtitlecaption"
    CHANNEL_DOWN = "channeldown"
    CHANNEL_LIST = "channellist"
    CHANNEL_UP = "channelup"
    DEVICE_INPUT = "deviceinput"
    ENERGY_SAVING = "screenbright"
    EXIT = "exit"
    FAST_FORWARD = "fastforward"
    GREEN_BUTTON = "greenbutton"
    HOME = "myapp"
    INFO = "programminfo"
    LIVE_TV = "livetv"
    MENU = "settingmenu"
    NUMBER0 = "number0"
    NUMBER1 = "number1"
    NUMBER2 = "number2"
    NUMBER3 = "number3"
    NUMBER4 = "number4"
    NUMBER5 = "number5"
    NUMBER6 = "number6"
    NUMBER7 = "number7"
    NUMBER8 = "number8"
    NUMBER9 = "number9"
    OK = "ok"
    PAUSE = "pause"
    PLAY = "play"
    PREVIOUS_CHANNEL = "previouschannel"
    PROGRAM_GUIDE = "programguide"
    QUICK_SETTINGS = "quickmenu"
    RECORD = "record"
    RED_BUTTON = "redbutton"
    REWIND = "rewind"
    SLEEP_TIMER = "sleepreserve"
    STOP = "stop"
    USER_GUIDE = "userguide"
    VIDEO_MODE = "videomode"
    VOLUME_DOWN = "volumedown"
    VOLUME_MUTE = "volumemute"
    VOLUME_UP = "volumeup"
    YELLOW_BUTTON = "yellowbutton"


class PictureMode(str, Enum):
    """Picture modes for ``PICTURE_MODE``."""

    CINEMA = "cinema"
    ECO = "eco"
    EXPERT1 = "expert1"
    EXPERT2 = "expert2"
    FILMMAKER = "filmMaker"
    GAME = "game"
    HDR_EFFECT = "hdrEffect"
    NORMAL = "normal"
    PHOTO = "photo"
    SPORTS = "sports"
    TECHNICOLOR = "technicolor"
    VIVID = "vivid"


class EnergySavingLevel(str, Enum):
    """Energy saving levels for ``ENERGY_SAVING``."""

    AUTO = "auto"
    SCREEN_OFF = "screen_off"
    MAXIMUM = "maximum"
    MEDIUM = "medium"
    MINIMUM = "minimum"
    OFF = "off"


class ScreenMuteMode(str, Enum):
    """Screen mute modes for ``SCREEN_MUTE``."""

    SCREEN_MUTE_ON = "screenmuteon"
    VIDEO_MUTE_ON = "videomuteon"
    ALL_MUTE_OFF = "allmuteoff"


class MacAddressType(str, Enum):
    """Interfaces for ``GET_MACADDRESS``."""

    WIRED = "wired"
    WIFI = "wifi"


class PowerState(str, Enum):
    """Result of a power state probe."""

    ON = "on"
    OFF = "off"
    UNKNOWN = "unknown"
