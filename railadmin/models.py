from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from .database import Base


# --- LAYER 1: INFRASTRUCTURE ---
class Station(Base):
    __tablename__ = "stations"
    name = Column(String(100), primary_key=True)
    platform_count = Column(Integer, nullable=False)


class Route(Base):
    __tablename__ = "routes"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    origin_station = Column(String(100), ForeignKey("stations.name", name="fk_origin"), nullable=False)
    destination_station = Column(String(100), ForeignKey("stations.name", name="fk_destination"), nullable=False)
    base_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)

    origin = relationship("Station", foreign_keys=[origin_station])
    destination = relationship("Station", foreign_keys=[destination_station])

    __table_args__ = (UniqueConstraint("origin_station", "destination_station", name="unique_route"),)




# --- LAYER 2: ASSETS ---
class Train(Base):
    __tablename__ = "trains"
    number = Column(String(20), primary_key=True)
    type = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False)




# --- LAYER 3: ACCOUNTS ---
class User(Base):
    __tablename__ = "users"
    username = Column(String(50), primary_key=True)
    password = Column(String(100), nullable=False)     # stored as entered, no hashing
    user_type = Column(String(20), nullable=False)     # ADMIN / CUSTOMER
    full_name = Column(String(100), nullable=True)
    email = Column(String(100), nullable=True)
