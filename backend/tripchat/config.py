from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Mapbox — geocoding + directions
    mapbox_access_token: str = ""
    mapbox_base_url: str = "https://api.mapbox.com"

    # Wikipedia — popular places + history
    wikipedia_base_url: str = "https://en.wikipedia.org"

    # Foursquare Places — hotel search
    foursquare_api_key: str = ""
    foursquare_base_url: str = "https://api.foursquare.com"

    # Outbound HTTP
    http_user_agent: str = "tripchat/0.1 (travel assistant)"
    provider_timeout_seconds: float = 5.0

    # Travel modes offered to the LLM tool
    travel_modes: str = "driving,walking,cycling"
    default_travel_mode: str = "driving"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    # Tool-calling rounds per chat request
    llm_max_steps: int = 4

    # CORS
    cors_origins: str = "http://localhost:3000"

    @property
    def travel_mode_list(self) -> list[str]:
        return [mode.strip() for mode in self.travel_modes.split(",") if mode.strip()]

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
