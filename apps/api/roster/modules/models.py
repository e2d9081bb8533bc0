"""All table models, imported together so SQLModel.metadata (create_all, alembic) sees every table."""
from roster.modules.characters.models import Character
from roster.modules.classes.models import GameClass
from roster.modules.factions.models import Faction
from roster.modules.race_classes.models import RaceClass
from roster.modules.races.models import Race
from roster.modules.specializations.models import Specialization

__all__ = ["Character", "Faction", "GameClass", "Race", "RaceClass", "Specialization"]
