"""Runtime configuration for Rooster Ranch."""

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="ROOSTER_RANCH_", env_file=".env", extra="ignore")

    app_name: str = "rooster-ranch"
    log_level: str = "INFO"
    data_dir: Path = Path("data")
    schematics_dir: Path = Field(
        default=Path("plugins/WorldEdit/schematics"),
        description="WorldEdit's schematic folder; structure files are loaded from here.",
    )

    farm_world: str = "rooster_farms"
    market_world: str = "rooster_market"
    farm_structure: str = "rooster_farm_good.schem"
    market_structure: str = "market.schem"

    island_spacing: float = Field(default=200.0, gt=0, description="Distance between island centers on the x axis.")
    protection_radius: float = Field(default=80.0, gt=0, description="Half-width of each farm's protected square.")
    island_y: float = 100.0
    signing_bonus: float = Field(default=50.0, ge=0, description="RC granted when a farm is created.")

    day_interval_seconds: float = Field(default=1200.0, gt=0, description="One in-game day (24000 ticks).")
    display_refresh_seconds: float = Field(default=1.0, gt=0)

    game_adapter: str = Field(default="echo", description="echo or minescript")
    minescript_command_prefix: str = "/"

    @model_validator(mode="after")
    def _check_island_clearance(self) -> "Settings":
        if self.island_spacing < 2 * self.protection_radius:
            raise ValueError(
                f"island_spacing ({self.island_spacing}) must be at least twice "
                f"protection_radius ({self.protection_radius}) or farm regions overlap"
            )
        return self


settings = Settings()
