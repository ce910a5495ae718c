"""Models for the Korea Investment (KIS) Open API (params and payloads)."""
from pydantic import BaseModel, ConfigDict, Field


class KisTokenRequest(BaseModel):
    """Body for POST /oauth2/tokenP."""

    grant_type: str = "client_credentials"
    appkey: str
    appsecret: str


class KisTokenResponse(BaseModel):
    """Access token issued by /oauth2/tokenP."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 86400


class KisDomesticPriceParams(BaseModel):
    """Params for inquire-price (domestic stock current price)."""

    market_div_code: str = Field(default="J", serialization_alias="FID_COND_MRKT_DIV_CODE")
    ticker: str = Field(serialization_alias="FID_INPUT_ISCD")

    model_config = ConfigDict(populate_by_name=True)


class KisOverseasPriceParams(BaseModel):
    """Params for overseas-price/quotations/price."""

    auth: str = Field(default="", serialization_alias="AUTH")
    exchange: str = Field(serialization_alias="EXCD")
    symbol: str = Field(serialization_alias="SYMB")

    model_config = ConfigDict(populate_by_name=True)


class KisEnvelope(BaseModel):
    """Common KIS response envelope. rt_cd "0" means success."""

    rt_cd: str = ""
    msg_cd: str = ""
    msg1: str = ""
    output: dict = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.rt_cd == "0"
