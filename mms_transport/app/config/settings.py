from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mms_transport.app.constants import (
    DEFAULT_HTTP_SOCKET_TIMEOUT_MS,
    DEFAULT_UA_PROF_TAG_NAME,
    DEFAULT_USER_AGENT,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    user_agent: str = Field(DEFAULT_USER_AGENT, validation_alias="MMS_USER_AGENT")
    ua_prof_tag_name: str = Field(DEFAULT_UA_PROF_TAG_NAME, validation_alias="MMS_UA_PROF_TAG_NAME")
    ua_prof_url: str | None = Field(None, validation_alias="MMS_UA_PROF_URL")
    http_socket_timeout_ms: int = Field(
        DEFAULT_HTTP_SOCKET_TIMEOUT_MS,
        validation_alias="MMS_HTTP_SOCKET_TIMEOUT_MS",
    )
    support_http_charset_header: bool = Field(False, validation_alias="MMS_SUPPORT_HTTP_CHARSET_HEADER")
    # Extra headers, "name:value|name:value"; values may reference ##MACRO## tokens.
    http_params: str = Field("", validation_alias="MMS_HTTP_PARAMS")

    # Accept-Language source; the process locale is used when unset.
    locale: str | None = Field(None, validation_alias="MMS_LOCALE")

    line1_number: str = Field("", validation_alias="MMS_LINE1_NUMBER")
    country_calling_code: str = Field("", validation_alias="MMS_COUNTRY_CALLING_CODE")
    nai: str = Field("", validation_alias="MMS_NAI")
    nai_suffix: str = Field("", validation_alias="MMS_NAI_SUFFIX")
    extra_macros: dict[str, str] = Field(default_factory=dict, validation_alias="MMS_EXTRA_MACROS")

    proxy_enabled: bool = Field(False, validation_alias="MMS_PROXY_ENABLED")
    proxy_host: str = Field("", validation_alias="MMS_PROXY_HOST")
    proxy_port: int = Field(80, validation_alias="MMS_PROXY_PORT")

    pool_max_connections: int = Field(5, validation_alias="MMS_POOL_MAX_CONNECTIONS")
    pool_keepalive_expiry_seconds: float = Field(300.0, validation_alias="MMS_POOL_KEEPALIVE_EXPIRY_SECONDS")
