"""Coordenadores: orquestração de eventos entre provedor e infraestrutura."""
