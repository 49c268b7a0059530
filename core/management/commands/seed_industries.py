"""
Management command to seed the two-level industry catalogue.
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from core.models import Industry

# (code, name, description, [(code, name), ...])
INDUSTRIES = [
    ('AGR', 'Agriculture & Agribusiness',
     'Crop production, livestock farming, agricultural machinery, agrochemicals, food processing', [
         ('AGR-CRP', 'Crop Production'),
         ('AGR-LST', 'Livestock Farming'),
         ('AGR-MCH', 'Agricultural Machinery'),
         ('AGR-CHM', 'Agrochemicals'),
         ('AGR-FOD', 'Food Processing'),
     ]),
    ('AUT', 'Automotive',
     'Vehicle manufacturing, auto parts production, car sales and dealerships, automotive services', [
         ('AUT-MFG', 'Vehicle Manufacturing'),
         ('AUT-PRT', 'Auto Parts Production'),
         ('AUT-SLS', 'Car Sales and Dealerships'),
         ('AUT-SVC', 'Automotive Services'),
     ]),
    ('AER', 'Aerospace & Defense',
     'Aircraft manufacturing, space exploration, military defense systems, aerospace engineering', [
         ('AER-ACT', 'Aircraft Manufacturing'),
         ('AER-SPC', 'Space Exploration'),
         ('AER-DEF', 'Military Defense Systems'),
         ('AER-ENG', 'Aerospace Engineering'),
     ]),
    ('FIN', 'Financial Services',
     'Banking, investment services, insurance, wealth management, credit services', [
         ('FIN-BNK', 'Banking'),
         ('FIN-INV', 'Investment Services'),
         ('FIN-WLT', 'Wealth Management'),
         ('FIN-CRD', 'Credit Services'),
     ]),
    ('HTH', 'Healthcare & Pharmaceuticals',
     'Hospitals and healthcare facilities, pharmaceutical companies, biotechnology', [
         ('HTH-HSP', 'Hospitals and Healthcare Facilities'),
         ('HTH-PHR', 'Pharmaceutical Companies'),
         ('HTH-EQP', 'Medical Equipment Manufacturing'),
     ]),
    ('ITC', 'Information Technology',
     'Software development, hardware manufacturing, IT consulting and services', [
         ('ITC-SFT', 'Software Development'),
         ('ITC-HRD', 'Hardware Manufacturing'),
         ('ITC-CNS', 'IT Consulting and Services'),
         ('ITC-CLD', 'Cloud Computing'),
     ]),
    ('DIG', 'Digital Technology & Innovation',
     'Emerging technologies, digital transformation, and innovation services', [
         ('DIG-AI', 'Artificial Intelligence & Machine Learning'),
         ('DIG-BLK', 'Blockchain & Web3'),
         ('DIG-SEC', 'Cybersecurity'),
         ('DIG-DAT', 'Data Science & Analytics'),
         ('DIG-TRF', 'Digital Transformation'),
     ]),
    ('EDU', 'Education',
     'Schools and universities, e-learning platforms, educational services', [
         ('EDU-SCH', 'Schools and Universities'),
         ('EDU-ELE', 'E-learning Platforms'),
         ('EDU-SVC', 'Educational Services'),
         ('EDU-VOC', 'Vocational Training'),
     ]),
    ('MED', 'Media & Entertainment',
     'Film and television, music industry, publishing, broadcasting', [
         ('MED-FTV', 'Film and Television'),
         ('MED-MUS', 'Music Industry'),
         ('MED-PUB', 'Publishing'),
         ('MED-BRD', 'Broadcasting'),
         ('MED-GAM', 'Gaming and Esports'),
     ]),
    ('TEL', 'Telecommunications',
     'Mobile services, internet providers, satellite and cable TV', [
         ('TEL-MOB', 'Mobile Services'),
         ('TEL-INT', 'Internet Providers'),
         ('TEL-SAT', 'Satellite and Cable TV'),
         ('TEL-NET', 'Networking Services'),
     ]),
    ('ENV', 'Environmental Services',
     'Waste management, recycling services, environmental consultancy', [
         ('ENV-WST', 'Waste Management'),
         ('ENV-REC', 'Recycling Services'),
         ('ENV-CNS', 'Environmental Consultancy'),
         ('ENV-QAL', 'Water and Air Quality Management'),
         ('ENV-REN', 'Renewable Energy Solutions'),
     ]),
    ('LEG', 'Legal Services',
     'Law firms, legal consultancies, corporate law, litigation', [
         ('LEG-FRM', 'Law Firms'),
         ('LEG-CNS', 'Legal Consultancies'),
         ('LEG-COR', 'Corporate Law'),
         ('LEG-LIT', 'Litigation'),
         ('LEG-IPR', 'Intellectual Property Services'),
     ]),
    ('MKT', 'Marketing & Advertising',
     'Digital marketing, branding and PR, advertising agencies', [
         ('MKT-DIG', 'Digital Marketing'),
         ('MKT-BRD', 'Branding and PR'),
         ('MKT-ADV', 'Advertising Agencies'),
         ('MKT-RES', 'Market Research'),
         ('MKT-EVT', 'Event Marketing'),
     ]),
    ('MIN', 'Mining & Metals',
     'Mining of natural resources, metal production, resource exploration', [
         ('MIN-NAT', 'Mining of Natural Resources'),
         ('MIN-MET', 'Metal Production'),
         ('MIN-EXP', 'Resource Exploration'),
         ('MIN-PRC', 'Mineral Processing'),
     ]),
    ('GOV', 'Public Sector / Government',
     'Local, state, and national government services, public administration', [
         ('GOV-LOC', 'Local Government Services'),
         ('GOV-STT', 'State Government Services'),
         ('GOV-NAT', 'National Government Services'),
         ('GOV-ADM', 'Public Administration'),
         ('GOV-REG', 'Regulatory Agencies'),
     ]),
    ('PRF', 'Professional Services',
     'Consulting, accounting and auditing, legal services, HR', [
         ('PRF-CNS', 'Consulting'),
         ('PRF-ACC', 'Accounting and Auditing'),
         ('PRF-HR', 'Human Resources and Staffing'),
         ('PRF-ENG', 'Architecture and Engineering'),
     ]),
    ('BIO', 'Biotechnology',
     'Genetic research, bio-pharmaceuticals, medical diagnostics', [
         ('BIO-GEN', 'Genetic Research'),
         ('BIO-PHR', 'Bio-pharmaceuticals'),
         ('BIO-DIA', 'Medical Diagnostics'),
         ('BIO-AGR', 'Agricultural Biotechnology'),
     ]),
    ('INS', 'Insurance',
     'Life insurance, health insurance, property and casualty insurance', [
         ('INS-LIF', 'Life Insurance'),
         ('INS-HLT', 'Health Insurance'),
         ('INS-PRP', 'Property and Casualty Insurance'),
         ('INS-REI', 'Reinsurance'),
         ('INS-BRK', 'Insurance Brokerage'),
     ]),
]


class Command(BaseCommand):
    help = 'Create or update the built-in industry catalogue (idempotent)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run', action='store_true',
            help='Report what would change without writing anything',
        )

    def handle(self, *args, **options):
        self.dry_run = options['dry_run']
        self.created = 0
        self.updated = 0

        self.stdout.write('Seeding industries...')
        with transaction.atomic():
            for code, name, description, children in INDUSTRIES:
                parent = self.upsert(code, name, description, parent=None)
                for child_code, child_name in children:
                    self.upsert(child_code, child_name, None, parent=parent)
            if self.dry_run:
                transaction.set_rollback(True)

        suffix = ' (dry run)' if self.dry_run else ''
        self.stdout.write(self.style.SUCCESS(
            f'Industries seeded: {self.created} created, {self.updated} updated{suffix}'
        ))

    def upsert(self, code, name, description, parent):
        values = {'name': name, 'parent': parent, 'deleted_at': None}
        if description is not None:
            values['description'] = description
        industry = Industry.objects.filter(code=code).first()
        if industry is None:
            self.created += 1
            return Industry.objects.create(code=code, **values)
        changed = [k for k, v in values.items() if getattr(industry, k) != v]
        if changed:
            for key in changed:
                setattr(industry, key, values[key])
            industry.save(update_fields=changed + ['updated_at'])
            self.updated += 1
        return industry
