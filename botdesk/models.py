"""
Typed records exchanged with the BotDesk server.

The server speaks camelCase JSON; each record converts with from_dict/to_dict.
from_dict tolerates missing keys and wrong types, falling back to defaults,
so a partial payload never breaks a page.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


def _str(value: Any, default: str = '') -> str:
    return default if value is None else str(value)


def _float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class BotStatus(str, Enum):
    ONLINE = 'ONLINE'
    OFFLINE = 'OFFLINE'
    PAUSADO = 'PAUSADO'

    @classmethod
    def coerce(cls, value: Any) -> 'BotStatus':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.OFFLINE


class ProductType(str, Enum):
    PRINCIPAL = 'PRINCIPAL'
    ORDER_BUMP = 'ORDER_BUMP'
    UPSELL = 'UPSELL'
    DOWNSELL = 'DOWNSELL'

    @classmethod
    def coerce(cls, value: Any) -> 'ProductType':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.PRINCIPAL


class AIMode(str, Enum):
    DESLIGADO = 'DESLIGADO'
    FALLBACK = 'FALLBACK'
    SEMPRE_ATIVO = 'SEMPRE_ATIVO'

    @classmethod
    def coerce(cls, value: Any) -> 'AIMode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.DESLIGADO


AI_MODELS = ('gpt-3.5-turbo', 'gpt-4', 'gpt-4o')

WHATSAPP_STATUSES = ('connected', 'disconnected', 'pairing', 'cooldown', 'blocked')


@dataclass
class BotStats:
    conversations: int = 0
    sales: int = 0
    revenue: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> 'BotStats':
        data = _dict(data)
        return cls(_int(data.get('conversations')), _int(data.get('sales')), _float(data.get('revenue')))

    def to_dict(self) -> Dict[str, Any]:
        return {'conversations': self.conversations, 'sales': self.sales, 'revenue': self.revenue}


@dataclass
class Bot:
    id: str
    name: str = ''
    phone_number: str = ''
    status: BotStatus = BotStatus.OFFLINE
    stats: BotStats = field(default_factory=BotStats)
    ab_test_group: Optional[str] = None

    @property
    def is_online(self) -> bool:
        return self.status == BotStatus.ONLINE

    @classmethod
    def from_dict(cls, data: Any) -> 'Bot':
        data = _dict(data)
        group = data.get('abTestGroup')
        return cls(
            id=_str(data.get('id')),
            name=_str(data.get('name')),
            phone_number=_str(data.get('phoneNumber')),
            status=BotStatus.coerce(data.get('status')),
            stats=BotStats.from_dict(data.get('stats')),
            ab_test_group=group if group in ('A', 'B') else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'name': self.name,
            'phoneNumber': self.phone_number,
            'status': self.status.value,
            'stats': self.stats.to_dict(),
        }
        if self.ab_test_group:
            result['abTestGroup'] = self.ab_test_group
        return result


@dataclass
class Product:
    id: str
    name: str = ''
    description: str = ''
    price: float = 0.0
    type: ProductType = ProductType.PRINCIPAL
    bot_id: Optional[str] = None
    flow_step: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'Product':
        data = _dict(data)
        return cls(
            id=_str(data.get('id')),
            name=_str(data.get('name')),
            description=_str(data.get('description')),
            price=_float(data.get('price')),
            type=ProductType.coerce(data.get('type')),
            bot_id=data.get('botId'),
            flow_step=data.get('flowStep'),
        )

    def to_dict(self, include_id: bool = True) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'name': self.name,
            'description': self.description,
            'price': self.price,
            'type': self.type.value,
        }
        if include_id:
            result['id'] = self.id
        if self.bot_id:
            result['botId'] = self.bot_id
        if self.flow_step:
            result['flowStep'] = self.flow_step
        return result


@dataclass
class Customer:
    id: str
    phone_number: str = ''
    name: Optional[str] = None
    bot_id: str = ''
    purchased_product_ids: List[str] = field(default_factory=list)
    created_at: str = ''

    @property
    def display_name(self) -> str:
        return self.name or 'Unknown'

    @classmethod
    def from_dict(cls, data: Any) -> 'Customer':
        data = _dict(data)
        return cls(
            id=_str(data.get('id')),
            phone_number=_str(data.get('phoneNumber')),
            name=data.get('name') or None,
            bot_id=_str(data.get('botId')),
            purchased_product_ids=[str(p) for p in _list(data.get('purchasedProductIds'))],
            created_at=_str(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'phoneNumber': self.phone_number,
            'name': self.name,
            'botId': self.bot_id,
            'purchasedProductIds': list(self.purchased_product_ids),
            'createdAt': self.created_at,
        }


@dataclass
class ABTestConfig:
    id: str = ''
    is_enabled: bool = False
    name: str = ''
    bot_a_id: str = ''
    bot_b_id: str = ''
    distribution_a: int = 50
    distribution_b: int = 50

    def set_distribution(self, percent_a: int) -> None:
        """Split traffic so both shares always add up to 100."""
        percent_a = min(max(int(percent_a), 0), 100)
        self.distribution_a = percent_a
        self.distribution_b = 100 - percent_a

    @classmethod
    def from_dict(cls, data: Any) -> 'ABTestConfig':
        data = _dict(data)
        return cls(
            id=_str(data.get('id')),
            is_enabled=bool(data.get('isEnabled', False)),
            name=_str(data.get('name')),
            bot_a_id=_str(data.get('botA_Id')),
            bot_b_id=_str(data.get('botB_Id')),
            distribution_a=_int(data.get('distributionA'), 50),
            distribution_b=_int(data.get('distributionB'), 50),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'isEnabled': self.is_enabled,
            'name': self.name,
            'botA_Id': self.bot_a_id,
            'botB_Id': self.bot_b_id,
            'distributionA': self.distribution_a,
            'distributionB': self.distribution_b,
        }


@dataclass
class SalesMetric:
    date: str
    amount: float = 0.0
    bot_name: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'SalesMetric':
        data = _dict(data)
        return cls(_str(data.get('date')), _float(data.get('amount')), _str(data.get('botName')))


@dataclass
class MetricsSummary:
    revenue: float = 0.0
    active_bots: int = 0
    total_conversations: int = 0
    conversion_rate: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> 'MetricsSummary':
        data = _dict(data)
        return cls(
            revenue=_float(data.get('revenue')),
            active_bots=_int(data.get('activeBots')),
            total_conversations=_int(data.get('totalConversations')),
            conversion_rate=_float(data.get('conversionRate')),
        )


@dataclass
class AIConfig:
    bot_id: str
    mode: AIMode = AIMode.DESLIGADO
    model: str = 'gpt-4o'
    temperature: float = 0.7
    max_tokens: int = 500
    system_prompt: str = ''

    @classmethod
    def from_dict(cls, data: Any, bot_id: str = '') -> 'AIConfig':
        data = _dict(data)
        model = _str(data.get('model'), 'gpt-4o')
        return cls(
            bot_id=_str(data.get('botId'), bot_id) or bot_id,
            mode=AIMode.coerce(data.get('mode')),
            model=model if model in AI_MODELS else 'gpt-4o',
            temperature=_float(data.get('temperature'), 0.7),
            max_tokens=_int(data.get('maxTokens'), 500),
            system_prompt=_str(data.get('systemPrompt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'botId': self.bot_id,
            'mode': self.mode.value,
            'model': self.model,
            'temperature': self.temperature,
            'maxTokens': self.max_tokens,
            'systemPrompt': self.system_prompt,
        }


@dataclass
class KnowledgeItem:
    id: str
    bot_id: str
    title: str = ''
    content: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'KnowledgeItem':
        data = _dict(data)
        return cls(_str(data.get('id')), _str(data.get('botId')), _str(data.get('title')), _str(data.get('content')))

    def to_dict(self, include_id: bool = True) -> Dict[str, Any]:
        result = {'botId': self.bot_id, 'title': self.title, 'content': self.content}
        if include_id:
            result['id'] = self.id
        return result


@dataclass
class TrainingExample:
    id: str
    bot_id: str
    user_message: str = ''
    ideal_response: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'TrainingExample':
        data = _dict(data)
        return cls(
            _str(data.get('id')),
            _str(data.get('botId')),
            _str(data.get('userMessage')),
            _str(data.get('idealResponse')),
        )

    def to_dict(self, include_id: bool = True) -> Dict[str, Any]:
        result = {'botId': self.bot_id, 'userMessage': self.user_message, 'idealResponse': self.ideal_response}
        if include_id:
            result['id'] = self.id
        return result


@dataclass
class MediaItem:
    id: str
    name: str
    type: str  # 'image' | 'audio' | 'file'
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'type': self.type, 'url': self.url}


@dataclass
class PairingResponse:
    pairing_code: str
    expires_in: int  # seconds

    @classmethod
    def from_dict(cls, data: Any) -> 'PairingResponse':
        data = _dict(data)
        return cls(_str(data.get('pairingCode')), _int(data.get('expiresIn')))


class WhatsAppStatus(str, Enum):
    CONNECTED = 'connected'
    DISCONNECTED = 'disconnected'
    PAIRING = 'pairing'
    COOLDOWN = 'cooldown'
    BLOCKED = 'blocked'

    @classmethod
    def coerce(cls, value: Any) -> 'WhatsAppStatus':
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            value = value.get('status')
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.DISCONNECTED


@dataclass
class GlobalSettings:
    global_fallback_message: str = ''
    admin_phone: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'GlobalSettings':
        data = _dict(data)
        return cls(_str(data.get('globalFallbackMessage')), _str(data.get('adminPhone')))

    def to_dict(self) -> Dict[str, Any]:
        return {'globalFallbackMessage': self.global_fallback_message, 'adminPhone': self.admin_phone}


TIMING_FIELDS = {
    'typing_delay': 'typingDelay',
    'message_interval': 'messageInterval',
    'read_receipt_delay': 'readReceiptDelay',
    'follow_up_delay': 'followUpDelay',
}


@dataclass
class TimingConfig:
    """Global message delays, in milliseconds. Unknown server keys are kept in `extra`."""
    typing_delay: int = 0
    message_interval: int = 0
    read_receipt_delay: int = 0
    follow_up_delay: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> 'TimingConfig':
        data = dict(_dict(data))
        values = {attr: _int(data.pop(key, 0)) for attr, key in TIMING_FIELDS.items()}
        return cls(extra=data, **values)

    def to_dict(self) -> Dict[str, Any]:
        result = dict(self.extra)
        for attr, key in TIMING_FIELDS.items():
            result[key] = getattr(self, attr)
        return result
