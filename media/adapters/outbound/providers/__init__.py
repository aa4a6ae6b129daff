from .rapidapi_provider import RapidApiProvider
from .snaptik_provider import SnaptikProvider
from .ssstik_provider import SsstikProvider
from .tikdown_provider import TikdownApiProvider, TikdownProvider
from .tikwm_provider import TikwmProvider
