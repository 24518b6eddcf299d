from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .database import Base


class ProjectStatus:
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


class Project(Base):
    __tablename__ = "projects"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    status = Column(String(20), default=ProjectStatus.DRAFT)
    
    # Floor plan
    floor_plan_layout = Column(Text)       # JSON array of placed rooms, stored verbatim
    floor_plan_image_url = Column(Text)    # Backdrop of photo-traced plans
    
    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    rooms = relationship(
        "ProjectRoom",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectRoom.id"
    )


class ProjectRoom(Base):
    __tablename__ = "project_rooms"
    
    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    
    room_type = Column(String(50), nullable=False)
    custom_name = Column(String(255))
    quantity = Column(Integer, default=1)
    floor = Column(Integer, default=0)
    area_m2 = Column(Float)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    project = relationship("Project", back_populates="rooms")
