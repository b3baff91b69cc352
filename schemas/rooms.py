from pydantic import BaseModel, FiniteFloat, StrictInt
from typing import Optional, Union


class Participant(BaseModel):
    id: str
    name: str

class JoinRequest(BaseModel):
    roomId: Optional[str] = None
    name: Optional[str] = None

class NoteOnRequest(BaseModel):
    note: str
    velocity: Union[StrictInt, FiniteFloat]

class NoteOffRequest(BaseModel):
    note: str

class NoteOnEvent(BaseModel):
    note: str
    velocity: Union[StrictInt, FiniteFloat]
    userId: str

class NoteOffEvent(BaseModel):
    note: str
    userId: str

class UserLeftEvent(BaseModel):
    userId: str

class RoomSummary(BaseModel):
    room_id: str
    online_users_count: int

class RoomDetailsResponse(BaseModel):
    room_id: str
    online_users_count: int
    online_users: list[Participant]

class HealthResponse(BaseModel):
    status: str
    rooms: int
