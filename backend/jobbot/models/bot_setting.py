from sqlalchemy import JSON, Column, Text
from jobbot.database import Base


class BotSetting(Base):
    __tablename__ = "bot_settings"

    setting_key = Column(Text, primary_key=True)
    setting_value = Column(JSON)
    updated_at = Column(Text, nullable=False)
