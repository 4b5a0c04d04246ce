from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from modules.notes import schemas, service

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("", response_model=list[schemas.NoteRead])
def list_notes_endpoint(db: Session = Depends(get_db)):
    return service.list_notes(db)


@router.post("", response_model=schemas.NoteRead, status_code=status.HTTP_201_CREATED)
def create_note_endpoint(note_in: schemas.NoteCreate, db: Session = Depends(get_db)):
    return service.create_note(db, note_in)


@router.get("/{note_id}", response_model=schemas.NoteRead)
def get_note_endpoint(note_id: int, db: Session = Depends(get_db)):
    return service.get_note(db, note_id)


@router.put("/{note_id}", response_model=schemas.NoteRead)
def update_note_endpoint(note_id: int, note_in: schemas.NoteUpdate, db: Session = Depends(get_db)):
    return service.update_note(db, note_id, note_in)


@router.delete("/{note_id}")
def delete_note_endpoint(note_id: int, db: Session = Depends(get_db)):
    service.delete_note(db, note_id)
    return {"message": "Note deleted successfully"}
