# src/ngo_registry/utils/zone_catalog.py
"""
Reference data offered by the intervention-zone step of the registration form:
the West African countries, and for Senegal its regions, departments and
municipalities.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from src.ngo_registry.schemas.zone import ZoneToggle, ZoneType
from src.ngo_registry.utils.errors import UnknownZoneError

WEST_AFRICA_COUNTRIES: List[str] = [
    'Bénin',
    'Burkina Faso',
    'Cap-Vert',
    'Côte d\'Ivoire',
    'Gambie',
    'Ghana',
    'Guinée',
    'Guinée-Bissau',
    'Libéria',
    'Mali',
    'Niger',
    'Nigeria',
    'Sénégal',
    'Sierra Leone',
    'Togo'
]

SENEGAL_REGIONS: List[str] = [
    'Dakar',
    'Diourbel',
    'Fatick',
    'Kaolack',
    'Kédougou',
    'Kolda',
    'Louga',
    'Matam',
    'Saint-Louis',
    'Sédhiou',
    'Tambacounda',
    'Thiès',
    'Ziguinchor',
    'Kaffrine'
]

SENEGAL_REGIONS_DATA: Dict[str, Dict[str, List[str]]] = {
    'Dakar': {
        'Dakar': ['Dakar Plateau', 'Gorée', 'Fann / Point E / Amitié','Gueule Tapee Fass-Colobane','Grand Dakar', 'Biscuiterie', 'HLM', 'Hann Bel Air', 'Sicap Liberte', 'Dieuppeul Derkle', 'Ouakam', 'Ngor', 'Yoff', 'Mermoz/Sacre Coeur', 'Grand Yoff', 'Patte d\'oie', 'Parcelles Assainies', 'Camberene'],
        'Guédiawaye': ['Golf Sud', 'Sam Notaire', 'Ndiarème Limamoulaye', 'Wakhinane Nimzatt', 'Médina Gounass'],
        'Pikine': ['Pikine Est', 'Pikine Nord', 'Pikine Ouest', 'Dalifort-Foirail', 'Djida Thiaroye Kao', 'Guinaw Rail Nord', 'Guinaw Rail Sud', 'Diacksao', 'Diamagueune Sicap Mbao', 'Mbao', 'Thiaroye sur mer', 'Thiaroye Gare'],
        'Rufisque': ['Rufisque Est', 'Rufisque Nord', 'Rufisque Ouest', 'Bargny', 'Sébikotane', 'Sendou', 'Sangalkam', 'Bambylor', 'Yène', 'Tivaouane Peulh-Niaga', 'Diamniadio'],
        'Keur Massar': ['Yeumbeul Nord', 'Yeumbeul Sud', 'Malika', 'Keur Massar Nord', 'Jaxaay-parcelles', 'Keur Massar Sud']
    },
    'Diourbel': {
        'Bambey': ['Bambey', 'Dinguiraye', 'Baba Garage', 'Lambaye', 'Ngoye', 'Ndondol', 'Ndangalma', 'Gawane', 'N’gogom', 'Keur Samba Kane', 'Thiakar'],
        'Diourbel': ['Diourbel', 'Ndoulo', 'Ndindy', 'Tocky Gare', 'Touré Mbonde', 'Keur N\'galou', 'Taiba Moutoupha', 'N\'gohe', 'Gade Escale', 'Dankh Sene', 'Touba Lappe', 'Patar'],
        'Mbacké': ['Mbacké', 'Touba Mosquée', 'Dalla Ngabou', 'Madina', 'Touba Fall', 'Dandeye Gouygui', 'Taïf', 'Sadio', 'Taïba Thiékène', 'Nghaye', 'Missirah', 'Ndioumane Thiekene', 'Kael','Touba Mboul', 'Darou Nahim', 'Darou Salam Typ']
    },
    'Fatick': {
        'Fatick': ['Fatick', 'Dioffior', 'Thiare Ndialgui', 'Diakhao', 'Diarere', 'Diouroup', 'Tataguine', 'Mbellacadiao', 'Ndiop', 'Diaoulé', 'Fimela', 'Loul Sessène', 'Palmarin Facao', 'Niakhar', 'Ngayokhème', 'Patar'],
        'Foundiougne': ['Foundiougne', 'Sokone', 'Keur Saloum Diané', 'Keur Samba Gueye', 'Dionewar', 'Djirnda', 'Toubacouta', 'Nioro Alassane Tall', 'Karang Poste', 'Passy', 'Soum', 'Diossong', 'Djilor', 'Niassène', 'Diagane Barka', 'Mbam'],
        'Gossas': ['Gossas', 'Colobane', 'Mbar', 'Ndiene Lagane', 'Ouadiour', 'Patar Lia']
    },
    'Kaffrine': {
        'Kaffrine': ['Kaffrine', 'Kathiote', 'Médinatoul Salam 2', 'Gniby', 'Boulel', 'Kahi', 'Diokoul M\'belbouck', 'Diamagadio', 'Nganda'],
        'Birkelane': ['Birkelane', 'Keur Mboucki', 'Touba Mbella', 'Diamal', 'Mabo', 'Ndiognick', 'Mbeuleup', 'Segre gatta'],
        'Koungheul': ['Koungheul', 'Missirah Wadène', 'Maka Yop', 'Ngainthe Pathé', 'Fass Thiékène', 'Saly Escale', 'Ida Mouride', 'Ribot Escale', 'Lour Escale'],
        'Malem Hodar': ['Malem Hodar', 'Darou Minam 2', 'Khelcom', 'Ndioum Ngainth', 'Ndiobène Samba Lamo', 'Sagna', 'Dianké Souf']
    },
    'Kaolack': {
        'Kaolack': ['Kaolack', 'Kahone', 'Keur Baka', 'Latmingué', 'Thiaré', 'Ndoffane', 'Keur Socé', 'Ndiaffate', 'Ndiedieng', 'Dya', 'Ndiébel', 'Thiomby', 'Gandiaye', 'Sibassor'],
        'Guinguinéo': ['Guinguinéo', 'Khelcom – Birane', 'Mbadakhoune', 'Ndiago', 'Ngathie Naoudé', 'Fass', 'Gagnick', 'Dara Mboss', 'Mboss', 'Ngélou', 'Ourour', 'Panal Ouolof'],
        'Nioro du Rip': ['Nioro du Rip', 'Kayemor', 'Médina Sabakh', 'Ngayène', 'Gainthe Kaye', 'Dabaly', 'Darou Salam', 'Paos Koto', 'Porokhane', 'Taïba Niassène', 'Keur Maba Diakhou', 'Keur Madiabel', 'Ndrame Escale', 'Keur Madongo', 'Wack Ngouna']
    },
    'Kédougou': {
        'Kédougou': ['Kédougou', 'Ninéfecha', 'Bandafassi', 'Tomboronkoto', 'Dindefelo', 'Fongolimbi'],
        'Salémata': ['Salémata', 'Dakateli', 'Ethiolo', 'Oubadji', 'Dar Salam', 'Kevoye'],
        'Saraya': ['Saraya', 'Bembou', 'Médina Baffé', 'Sabodala', 'Khossanto', 'Missirah Sirimana']
    },
    'Kolda': {
        'Kolda': ['Kolda', 'Dialambéré', 'Médina Chérif', 'Sare Yoba Diega', 'Salikegne', 'Mampatim', 'Coumbacara', 'Bagadadji', 'Dabo', 'Thiétty', 'Saré Bidji', 'Dioulacolon', 'Tankanto Escale', 'Guiro Yéro Bocar', 'Médina El hadj'],
        'Médina Yoro Foulah': ['Médina Yoro Foulah', 'Badion', 'Fafacourou', 'Bourouco', 'Bignarabé', 'Ndorna', 'Koulinto', 'Niaming', 'Dinguiraye', 'Pata', 'Kerewane'],
        'Vélingara': ['Vélingara', 'Diaobé-Kabendou', 'Kounkané', 'Kandiaye', 'Saré Coly Sallé', 'Kandia', 'Némataba', 'Pakour', 'Paroumba', 'Ouassadou', 'Bonconto', 'Linkering', 'Médina Gounass', 'Sinthiang Koundara']
    },
    'Louga': {
        'Kébémer': ['Kébémer', 'Bandegne Ouolof', 'Diokoul Diawrigne', 'Kab Gaye', 'Loro', 'Thiolom Fall','Ngourane Wolof', 'Ndoyene', 'Thieppe', 'Guéoul', 'Mbacké Cajor', 'Darou Marnane', 'Darou Mousty', 'Mbadiane', 'Ndande', 'Sagata Gueth', 'Kanene Ndiob', 'Sam Yabal', 'Touba Merina'],
        'Linguère': ['Linguère', 'Dahra', 'Thiargny', 'Barkedji', 'Gassane', 'Thiel', 'Tessekere', 'Yang Yang', 'Mboula', 'Ouarkhokh', 'Kamb', 'Mbeuleukhe', 'Sagatta Djolof', 'Affé Djolof', 'Dodji', 'Labgar', 'Déaly', 'Thiamene Djolof'],
        'Louga': ['Louga', 'Coki', 'Pete Ouarack', 'Nguer Malal', 'Ndiagne', 'Guet Ardo', 'Thiamène Cayor', 'Mbédiène', 'Niomré', 'Nguidilé', 'Kelle Guèye', 'Léona', 'Keur Momar Sarr', 'Syer', 'Gande', 'Sakal', 'Ngueune Sarr']
    },
    'Matam': {
        'Matam': ['Matam', 'Ourossogui', 'Thilogne', 'Bokidiawé', 'Ogo', 'Nguidilogne', 'Nabadji Civol', 'Dabia', 'Agnam Civol', 'Oréfondé'],
        'Kanel': ['Kanel', 'Odobéré', 'Wouro Sidy', 'Ndendory', 'Sinthiou Bamambé-Banadji', 'Hamady Hounaré', 'Aouré', 'Bokiladji', 'Orkadiere', 'Ouaoundé', 'Semme', 'Dembancané'],
        'Ranérou': ['Ranérou', 'Lougré Thioly', 'Oudalaye', 'Vélingara']
    },
    'Saint-Louis': {
        'Dagana': ['Dagana', 'Richard Toll', 'Ross-Béthio', 'Rosso-Sénégal', 'Ngnith', 'Diama', 'Ronkh', 'Ndombo Sandjiry', 'Gae', 'Bokhol', 'Mbane'],
        'Podor': ['Podor', 'Méry', 'Doumga Lao', 'Madina Diathbé', 'Golléré', 'Mboumba', 'Walaldé', 'Aéré Lao', 'Gamadji Saré', 'Dodel', 'Galoya Toucouleur', 'Guédé Village', 'Guédé Chantier', 'Démette', 'Bodé Lao', 'Fanaye', 'Ndiayene Pendao', 'Niandane', 'Mbolo Birane', 'Boké Dialloubé', 'Pete'],
        'Saint-Louis': ['Saint-Louis', 'Mpal', 'Fass Ngom', 'Ndiébène Gandiol', 'Gandon']
    },
    'Sédhiou': {
        'Bounkiling': ['Bounkiling', 'Ndiamacouta', 'Boghal', 'Tankon', 'Ndiamalathiel', 'Djinany', 'Diacounda', 'Inor', 'Kandion Mangana', 'Diaroume', 'Bona', 'Diambati', 'Faoune', 'Madina Wandifa'],
        'Goudomp': ['Goudomp', 'Diattacounda', 'Samine', 'Yarang Balante', 'Mangaroungou Santo', 'Simbandi Balante', 'Djibanar', 'Kaour', 'Diouboudou', 'Simbandi Brassou', 'Baghere', 'Niagha', 'Tanaff', 'Karantaba'],
        'Sédhiou': ['Sédhiou', 'Diannah Malary', 'Sakar', 'Diendé', 'Marsassoum', 'Bambaly', 'Oudoucar', 'Sama Kanta Peulh', 'San Samba', 'Bémet Bidjini', 'Djirédji', 'Koussy']
    },
    'Tambacounda': {
        'Bakel': ['Bakel', 'Bélé', 'Sinthiou Fissa', 'Kidira', 'Toumboura', 'Sadatou', 'Madina Foulbé', 'Gathiary', 'Moudéry', 'Ballou', 'Gabou', 'Diawara'],
        'Goudiry': ['Goudiry', 'Boynguel Bamba', 'Sinthiou Mamadou Boubou', 'Koussan', 'Dounguel', 'Thianguel Bani', 'Bani Israel', 'Sinthiou Bocar Aly', 'Koulor', 'Bala', 'Koar', 'Goumbayel', 'Boutoucoufara'],
        'Koumpentoum': ['Koumpentoum', 'Bamba Thialène', 'Kahène', 'Payar', 'Kouthiaba Wolof', 'Kouthia Gaydi', 'Pass Coto', 'Malem Niany'],
        'Tambacounda': ['Tambacounda', 'Niani Toucouleur', 'Makacolibantang', 'Ndoga Babacar', 'Missirah', 'Néttéboulou', 'Dialacoto', 'Sinthiou Malème', 'Koussanar']
    },
    'Thiès': {
        'Mbour': ['Mbour', 'Joal-Fadiouth', 'Fissel', 'Ndiaganiao', 'Sessene', 'Sandiara', 'Nguéniène', 'Thiadiaye', 'Sindia', 'Malicounda', 'Nguekhokh', 'Diass', 'Ngaparou', 'Saly Portudal', 'Somone', 'Popenguine-Ndayane'],
        'Thiès': ['Thiès Est', 'Thiès Ouest', 'Thiès Nord', 'Kayar', 'Khombole', 'Pout', 'Fandène', 'Ndieyène Sirakh', 'Touba Toul', 'Keur Moussa', 'Diender', 'Ngoundiane', 'Notto', 'Tassète'],
        'Tivaouane': ['Tivaouane', 'Mékhé', 'Mboro', 'Méouane', 'Darou Khoudoss', 'Taïba Ndiaye', 'Mérina Dakhar', 'Mont Rolland', 'Koul', 'Pékèsse', 'Niakhène', 'Mbayène', 'Thilmakha', 'Ngandiouf', 'Notto Gouye Diama', 'Pire Goureye', 'Pambal']
    },
    'Ziguinchor': {
        'Bignona': ['Bignona', 'Thionck Essyl', 'Kataba 1', 'Djinaky', 'Kafountine', 'Diouloulou', 'Tenghory', 'Niamone', 'Ouonck', 'Coubalan', 'Balinghore', 'Diégoune', 'Kartiack', 'Mangagoulack', 'Mlomp', 'Djibidione', 'Oulampane', 'Sindian', 'Suelle'],
        'Oussouye': ['Oussouye', 'Diembéring', 'Santhiaba Manjack', 'Oukout', 'Mlomp'],
        'Ziguinchor': ['Ziguinchor', 'Niaguis', 'Adéane', 'Boutoupa Camaracounda', 'Niassia', 'Enampore']
    }
}


def catalog_tree() -> Dict[str, object]:
    """Nested structure the form renders: countries, then Senegal's subtree."""
    return {
        "countries": list(WEST_AFRICA_COUNTRIES),
        "regions": [
            {
                "name": region,
                "departments": [
                    {"name": dept, "municipalities": list(munis)}
                    for dept, munis in SENEGAL_REGIONS_DATA.get(region, {}).items()
                ],
            }
            for region in SENEGAL_REGIONS
        ],
    }


def region_for_department(department: str) -> Optional[str]:
    for region, departments in SENEGAL_REGIONS_DATA.items():
        if department in departments:
            return region
    return None


def check_toggle_known(event: ZoneToggle) -> None:
    """
    Raise UnknownZoneError when the toggle names something the form never offers.
    Only the HTTP toggle endpoint enforces this; the engine itself is name-agnostic.
    """
    if event.zone_type == ZoneType.country:
        if event.name not in WEST_AFRICA_COUNTRIES:
            raise UnknownZoneError(event.zone_type.value, event.name)
        return

    if event.zone_type == ZoneType.region:
        if event.name not in SENEGAL_REGIONS:
            raise UnknownZoneError(event.zone_type.value, event.name)
        return

    region = event.region_name
    departments = SENEGAL_REGIONS_DATA.get(region or "")
    if departments is None:
        raise UnknownZoneError(ZoneType.region.value, region or "")

    if event.zone_type == ZoneType.department:
        if event.name not in departments:
            raise UnknownZoneError(event.zone_type.value, event.name, scope=region)
        return

    department = event.parent_name or ""
    if department not in departments:
        raise UnknownZoneError(ZoneType.department.value, department, scope=region)
    if event.name not in departments[department]:
        raise UnknownZoneError(event.zone_type.value, event.name, scope=department)
