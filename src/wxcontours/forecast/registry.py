"""
Forecast model registry.

Maps dashboard model ids to Open-Meteo model/endpoint parameters and lists the
variable groups each model offers.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel

from wxcontours.shared.constants import OPEN_METEO_DEFAULT_ENDPOINT
from wxcontours.shared.exceptions import InvalidRequestError

VARIABLE_NAME_RE = re.compile(r'^[A-Za-z0-9_]+$')


class ModelCategory(str, Enum):
    GLOBAL = 'global'
    REGIONAL = 'regional'
    CAM = 'cam'
    ENSEMBLE = 'ensemble'


class VariableInfo(BaseModel):
    id: str
    name: str
    unit: str


class ModelDefinition(BaseModel):
    model_config = {'frozen': True}

    id: str
    name: str
    category: ModelCategory
    open_meteo_support: bool
    open_meteo_model: str | None = None
    open_meteo_api_endpoint: str | None = None
    variables: tuple[str, ...] = ()

    @property
    def endpoint(self) -> str:
        return self.open_meteo_api_endpoint or OPEN_METEO_DEFAULT_ENDPOINT


def _vars(*items: tuple[str, str, str]) -> list[VariableInfo]:
    return [VariableInfo(id=i, name=n, unit=u) for i, n, u in items]


# Variable groups available in Open-Meteo (units as shown on the dashboard)
VARIABLE_GROUPS: dict[str, list[VariableInfo]] = {
    'temperature': _vars(
        ('temperature_2m', '2m Temperature', '°F'),
        ('apparent_temperature', 'Feels Like', '°F'),
        ('temperature_850hPa', '850mb Temperature', '°F'),
        ('temperature_500hPa', '500mb Temperature', '°F'),
    ),
    'moisture': _vars(
        ('relative_humidity_2m', '2m Relative Humidity', '%'),
        ('dew_point_2m', '2m Dew Point', '°F'),
        ('precipitable_water', 'PWAT', 'in'),
    ),
    'wind': _vars(
        ('wind_speed_10m', '10m Wind Speed', 'mph'),
        ('wind_gusts_10m', '10m Wind Gusts', 'mph'),
        ('wind_speed_850hPa', '850mb Wind', 'mph'),
        ('wind_speed_500hPa', '500mb Wind', 'mph'),
        ('wind_speed_250hPa', '250mb Wind (Jet)', 'mph'),
    ),
    'precipitation': _vars(
        ('precipitation', 'Total Precipitation', 'in'),
        ('rain', 'Rain', 'in'),
        ('snowfall', 'Snowfall', 'in'),
        ('snow_depth', 'Snow Depth', 'in'),
    ),
    'severe': _vars(
        ('cape', 'CAPE', 'J/kg'),
        ('lifted_index', 'Lifted Index', ''),
        ('convective_inhibition', 'CIN', 'J/kg'),
    ),
    'pressure': _vars(
        ('surface_pressure', 'Surface Pressure', 'mb'),
        ('pressure_msl', 'MSLP', 'mb'),
        ('geopotential_height_500hPa', '500mb Heights', 'm'),
    ),
    'clouds': _vars(
        ('cloud_cover', 'Total Cloud Cover', '%'),
        ('cloud_cover_low', 'Low Clouds', '%'),
        ('cloud_cover_mid', 'Mid Clouds', '%'),
        ('cloud_cover_high', 'High Clouds', '%'),
    ),
}

_GROUP_BY_VARIABLE: dict[str, str] = {
    v.id: group for group, items in VARIABLE_GROUPS.items() for v in items
}

_ALL = ('temperature', 'moisture', 'wind', 'precipitation', 'severe', 'pressure', 'clouds')
_NO_SEVERE = ('temperature', 'moisture', 'wind', 'precipitation', 'pressure', 'clouds')
_ENSEMBLE = ('temperature', 'precipitation', 'wind')
_CAM_BASIC = ('temperature', 'precipitation', 'severe')


def _model(
    model_id: str,
    name: str,
    category: ModelCategory,
    variables: tuple[str, ...],
    om_model: str | None = None,
    endpoint: str | None = None,
) -> ModelDefinition:
    return ModelDefinition(
        id=model_id,
        name=name,
        category=category,
        open_meteo_support=om_model is not None,
        open_meteo_model=om_model,
        open_meteo_api_endpoint=endpoint,
        variables=variables,
    )


_G = ModelCategory.GLOBAL
_R = ModelCategory.REGIONAL
_C = ModelCategory.CAM
_E = ModelCategory.ENSEMBLE

MODEL_REGISTRY: tuple[ModelDefinition, ...] = (
    # Global
    _model('gfs', 'GFS', _G, _ALL, 'gfs_seamless'),
    _model('ecmwf', 'ECMWF IFS', _G, _NO_SEVERE, 'ecmwf_ifs', 'ecmwf'),
    _model(
        'ecmwf_aifs', 'ECMWF AIFS', _G,
        ('temperature', 'moisture', 'wind', 'precipitation', 'pressure'),
        'ecmwf_aifs', 'ecmwf',
    ),
    _model('icon_global', 'ICON Global', _G, _ALL, 'icon_global', 'dwd-icon'),
    _model('gdps', 'GDPS (GEM)', _G, _NO_SEVERE, 'gem_global', 'gem'),
    _model(
        'ukmo_global', 'UKMO Global', _G, _NO_SEVERE,
        'ukmo_global_deterministic_10km', 'ukmo',
    ),
    _model('cfs', 'CFS', _G, ('temperature', 'precipitation')),
    _model('gfs_graphcast', 'AI GFS (GraphCast)', _G, ('temperature', 'wind', 'precipitation')),
    # Regional
    _model('nam', 'NAM', _R, _ALL, 'gfs_seamless'),
    _model('rap', 'RAP', _R, ('temperature', 'moisture', 'wind', 'precipitation', 'severe')),
    _model('rdps', 'RDPS', _R, _NO_SEVERE, 'gem_regional', 'gem'),
    _model('icon_eu', 'ICON-EU', _R, _ALL, 'icon_eu', 'dwd-icon'),
    # Convection-allowing
    _model('hrrr', 'HRRR', _C, _ALL, 'gfs_hrrr'),
    _model('nam_3km', 'NAM 3km', _C, ('temperature', 'moisture', 'wind', 'precipitation', 'severe')),
    _model('hrdps', 'HRDPS', _C, _NO_SEVERE, 'gem_hrdps_continental', 'gem'),
    _model('icon_d2', 'ICON-D2', _C, _ALL, 'icon_d2', 'dwd-icon'),
    _model('hrw_arw', 'HRW WRF-ARW', _C, _CAM_BASIC),
    _model('hrw_nssl', 'HRW WRF-NSSL', _C, _CAM_BASIC),
    _model('hrw_fv3', 'HRW FV3', _C, _CAM_BASIC),
    _model('rrfs_a', 'RRFS-A', _C, ('temperature', 'moisture', 'wind', 'precipitation', 'severe')),
    _model('gsl_mpas', 'GSL MPAS-G', _C, _CAM_BASIC),
    _model('nssl_mpas_htpo', 'NSSL MPAS-HTPO', _C, _CAM_BASIC),
    _model('nssl_mpas_rn', 'NSSL MPAS-RN', _C, _CAM_BASIC),
    _model('nssl_mpas_rn3', 'NSSL MPAS-RN3', _C, _CAM_BASIC),
    # Ensembles
    _model('gefs', 'GEFS', _E, _ENSEMBLE, 'gfs_seamless', 'ensemble'),
    _model('ecmwf_eps', 'ECMWF EPS', _E, _ENSEMBLE, 'ecmwf_ifs', 'ensemble'),
    _model('eps_opendata', 'EPS (OpenData)', _E, _ENSEMBLE, 'ecmwf_ifs', 'ensemble'),
    _model('eps_aifs', 'EPS-AIFS', _E, ('temperature', 'precipitation')),
    _model('icon_eps', 'ICON-EPS', _E, _ENSEMBLE, 'icon_seamless', 'ensemble'),
    _model('cmce', 'CMCE (GEPS)', _E, _ENSEMBLE, 'gem_global', 'ensemble'),
    _model('mogreps_g', 'MOGREPS-G', _E, _ENSEMBLE),
    _model('sref', 'SREF', _E, _CAM_BASIC),
    _model(
        'nbm', 'NBM', _E,
        ('temperature', 'moisture', 'wind', 'precipitation', 'clouds'),
        'ncep_nbm_conus', 'forecast',
    ),
)

_BY_ID: dict[str, ModelDefinition] = {m.id: m for m in MODEL_REGISTRY}


def get_model_by_id(model_id: str) -> ModelDefinition | None:
    return _BY_ID.get(model_id)


def get_models_by_category(category: ModelCategory | str) -> list[ModelDefinition]:
    cat = ModelCategory(category)
    return [m for m in MODEL_REGISTRY if m.category == cat]


def get_supported_models() -> list[ModelDefinition]:
    return [m for m in MODEL_REGISTRY if m.open_meteo_support]


def model_variables(model: ModelDefinition) -> list[VariableInfo]:
    """Catalogued variables of the model, in group order."""
    return [v for group in model.variables for v in VARIABLE_GROUPS.get(group, [])]


def variable_group(variable: str) -> str | None:
    """Catalogue group of a variable, ``None`` for uncatalogued ids."""
    return _GROUP_BY_VARIABLE.get(variable)


def resolve_model(model_id: str, variable: str) -> ModelDefinition:
    """
    Model definition for a contour request.

    Raises:
        InvalidRequestError: unknown or unsupported model, malformed variable
            id, or a catalogued variable the model does not offer.

    """
    model = get_model_by_id(model_id)
    if model is None or not model.open_meteo_support:
        msg = 'Model not supported'
        raise InvalidRequestError(msg)
    if not VARIABLE_NAME_RE.fullmatch(variable):
        msg = f'Invalid variable: {variable!r}'
        raise InvalidRequestError(msg)
    group = variable_group(variable)
    if group is not None and group not in model.variables:
        msg = f'Variable {variable} is not available for model {model.id}'
        raise InvalidRequestError(msg)
    return model
