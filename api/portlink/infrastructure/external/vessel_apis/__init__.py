"""
Clientes de APIs externas de buques: Mawani (autoridad portuaria) y las
APIs configuradas por cada organizacion.

Los clientes solo hacen I/O HTTP y devuelven los registros tal como llegan;
la validacion y el mapeo a columnas viven en `mappings.py` para poder
contar fallos por registro.
"""
