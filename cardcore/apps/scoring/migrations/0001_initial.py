from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('roster', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='UnitScore',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('unit_index', models.PositiveSmallIntegerField(help_text='Número de hoyo (1..unit_count de la ronda).')),
                ('strokes', models.PositiveSmallIntegerField()),
                ('putts', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('fairway_hit', models.BooleanField(blank=True, null=True)),
                ('green_in_regulation', models.BooleanField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('participant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='unit_scores', to='roster.participant')),
                ('entered_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='entered_unit_scores', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ('participant_id', 'unit_index'),
                'constraints': [
                    models.UniqueConstraint(fields=('participant', 'unit_index'), name='uniq_participant_unit'),
                    models.CheckConstraint(condition=models.Q(('unit_index__gte', 1)), name='unit_index_positive'),
                    models.CheckConstraint(condition=models.Q(('strokes__gte', 1)), name='strokes_positive'),
                    models.CheckConstraint(condition=models.Q(('putts__isnull', True), ('putts__lte', models.F('strokes')), _connector='OR'), name='putts_not_over_strokes'),
                ],
            },
        ),
    ]
